"""Bundled JSON Schema definitions for course and stage manifests.

The ``*.schema.json`` files in this directory are package data; they are read
by :mod:`bootcs_schema.models.json_schema_loader` and are not user-overridable.
"""

COURSE_SCHEMA = "course.schema.json"
STAGE_SCHEMA = "stage.schema.json"
