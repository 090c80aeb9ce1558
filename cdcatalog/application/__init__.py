"""
Application layer.

Use cases orchestrating the catalog domain: reading CDs by id or by search
criteria, and creating or updating CDs under the catalog's write rules.
Collaborators are described as protocols and wired by the DI container.
"""
