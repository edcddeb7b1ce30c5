"""
Menu API — Services Layer
=========================

What:  Business logic between the routes (HTTP) and the database.
How:   A single generic `CrudService` implements the CRUD protocol; each
       resource gets its own instance built from its ResourceDefinition.
       Routes stay thin: extract raw input, call the service, write the
       envelope.
"""
