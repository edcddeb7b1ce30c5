"""
Menu API — Validator Unit Tests
===============================

What we test:
    ✅ Path ids: integer strings accepted, anything else rejected
    ✅ Create rules: required fields, ranges, unknown keys dropped
    ✅ Update rules: only present keys returned, present nulls rejected
    ✅ Error flattening into {field, reason}
"""

import pytest

from menu_api.exceptions import ValidationError
from menu_api.schemas.menu import (
    CategoryCreate,
    IngredientCreate,
    ProductCreate,
    ProductIngredientCreate,
    ProductIngredientUpdate,
    ProductUpdate,
)
from menu_api.validation import format_errors, validate_body, validate_id


class TestValidateId:

    @pytest.mark.parametrize("raw, expected", [("12", 12), (7, 7), ("0", 0)])
    def test_accepts_integers(self, raw, expected):
        assert validate_id(raw) == expected

    @pytest.mark.parametrize("raw", ["abc", "1.5", "", True, None])
    def test_rejects_non_integers(self, raw):
        with pytest.raises(ValidationError) as exc_info:
            validate_id(raw)
        assert exc_info.value.errors == [{"field": "id", "reason": "debe ser un número entero"}]
        assert exc_info.value.status_code == 400


class TestValidateBodyCreate:

    def test_missing_required_fields_listed(self):
        with pytest.raises(ValidationError) as exc_info:
            validate_body(ProductCreate, {"nombre": "Papas"})

        fields = {e["field"] for e in exc_info.value.errors}
        assert fields == {"categoria_id", "precio"}
        assert exc_info.value.message == "Datos inválidos"

    def test_defaults_applied_and_unknown_keys_dropped(self):
        values = validate_body(
            IngredientCreate, {"nombre": "Tomate", "color": "rojo", "id": 99}
        )
        assert values == {"nombre": "Tomate", "perecedero": True}

    def test_empty_nombre_rejected(self):
        with pytest.raises(ValidationError) as exc_info:
            validate_body(CategoryCreate, {"nombre": ""})
        assert exc_info.value.errors[0]["field"] == "nombre"

    @pytest.mark.parametrize("cantidad", [0, -1, "abc"])
    def test_cantidad_usada_must_be_positive_number(self, cantidad):
        body = {"producto_id": 1, "ingrediente_id": 1, "cantidad_usada": cantidad}
        with pytest.raises(ValidationError) as exc_info:
            validate_body(ProductIngredientCreate, body)
        assert exc_info.value.errors[0]["field"] == "cantidad_usada"

    def test_fractional_cantidad_accepted(self):
        body = {"producto_id": "10", "ingrediente_id": 5, "cantidad_usada": "0.25"}
        values = validate_body(ProductIngredientCreate, body)
        assert values == {"producto_id": 10, "ingrediente_id": 5, "cantidad_usada": 0.25}

    def test_negative_precio_rejected(self):
        body = {"categoria_id": 1, "nombre": "Papas", "precio": -3}
        with pytest.raises(ValidationError):
            validate_body(ProductCreate, body)

    @pytest.mark.parametrize("body", [[1, 2], "texto", 5])
    def test_non_object_body_rejected(self, body):
        with pytest.raises(ValidationError) as exc_info:
            validate_body(CategoryCreate, body)
        assert exc_info.value.errors == [
            {"field": "body", "reason": "el cuerpo debe ser un objeto JSON"}
        ]

    def test_missing_body_treated_as_empty_object(self):
        with pytest.raises(ValidationError) as exc_info:
            validate_body(CategoryCreate, None)
        assert exc_info.value.errors[0]["field"] == "nombre"


class TestValidateBodyPartial:

    def test_only_present_fields_returned(self):
        values = validate_body(ProductUpdate, {"precio": 49.9}, partial=True)
        assert values == {"precio": 49.9}

    def test_absent_fields_not_checked(self):
        assert validate_body(ProductIngredientUpdate, {}, partial=True) == {}

    def test_present_fields_checked(self):
        with pytest.raises(ValidationError):
            validate_body(ProductIngredientUpdate, {"cantidad_usada": 0}, partial=True)

    def test_null_rejected_for_required_column(self):
        with pytest.raises(ValidationError) as exc_info:
            validate_body(ProductUpdate, {"nombre": None}, partial=True)
        assert exc_info.value.errors[0]["field"] == "nombre"

    def test_null_allowed_for_nullable_column(self):
        values = validate_body(ProductUpdate, {"descripcion": None}, partial=True)
        assert values == {"descripcion": None}

    def test_unknown_keys_only_yields_nothing(self):
        assert validate_body(ProductUpdate, {"foo": 1}, partial=True) == {}


class TestFormatErrors:

    def test_strips_request_location(self):
        errors = [
            {"loc": ("body", "precio"), "msg": "Field required"},
            {"loc": ("path", "item_id"), "msg": "bad"},
        ]
        assert format_errors(errors) == [
            {"field": "precio", "reason": "Field required"},
            {"field": "item_id", "reason": "bad"},
        ]

    def test_whole_body_error(self):
        errors = [{"loc": ("body",), "msg": "JSON decode error"}]
        assert format_errors(errors) == [{"field": "body", "reason": "JSON decode error"}]


class TestNumericFields:

    @pytest.mark.parametrize("field", ["producto_id", "ingrediente_id", "cantidad_usada"])
    def test_boolean_rejected(self, field):
        body = {"producto_id": 1, "ingrediente_id": 1, "cantidad_usada": 1.5, field: True}
        with pytest.raises(ValidationError) as exc_info:
            validate_body(ProductIngredientCreate, body)
        assert exc_info.value.errors == [{"field": field, "reason": "Value error, debe ser numérico"}]

    def test_boolean_rejected_in_partial_update(self):
        with pytest.raises(ValidationError):
            validate_body(ProductUpdate, {"precio": True}, partial=True)

    def test_boolean_columns_still_take_booleans(self):
        values = validate_body(ProductUpdate, {"disponible": False}, partial=True)
        assert values == {"disponible": False}

    def test_foreign_key_beyond_integer_range(self):
        body = {"categoria_id": 2_147_483_648, "nombre": "Papas", "precio": 5}
        with pytest.raises(ValidationError) as exc_info:
            validate_body(ProductCreate, body)
        assert exc_info.value.errors[0]["field"] == "categoria_id"

    def test_largest_integer_id_accepted(self):
        body = {"categoria_id": 2_147_483_647, "nombre": "Papas", "precio": 5}
        assert validate_body(ProductCreate, body)["categoria_id"] == 2_147_483_647
