"""
Menu API — Pydantic Schemas
===========================

    - common.py: response envelope, field errors, health response
    - menu.py:   create/update rules and read models of the four resources
"""
