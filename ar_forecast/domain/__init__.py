"""
Domain module - Enterprise Business Rules

Contains the AR forecasting core: entities, constants, the data preparation
and five-stage pipeline services, and the interfaces of the collaborators the
core depends on (model source, price source, master-data store).

This layer has no knowledge of files, settings or frameworks.
"""
