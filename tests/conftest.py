"""Pytest configuration and fixtures for openapi-schema-graph tests."""

import pytest

PETSTORE_YAML = """\
openapi: 3.0.3
info:
  title: Petstore
  version: 1.0.0
paths: {}
components:
  schemas:
    Pet:
      description: A pet in the store
      oneOf:
        - $ref: '#/components/schemas/Cat'
        - $ref: '#/components/schemas/Dog'
    Cat:
      type: object
      required: [name]
      properties:
        name:
          type: string
        owner:
          $ref: 'common.yml#/components/schemas/User'
    Dog:
      type: object
      properties:
        name:
          type: string
        address:
          type: object
          properties:
            country:
              $ref: '#/components/schemas/Country'
    Country:
      type: string
      enum: [NL, DE, FR]
    Zoo:
      type: array
      items:
        $ref: '#/components/schemas/Pet'
    PetAlias:
      $ref: '#/components/schemas/Pet'
"""


@pytest.fixture
def petstore_yaml():
    """A small OpenAPI document exercising every relationship kind."""
    return PETSTORE_YAML


@pytest.fixture
def cache_dir(tmp_path):
    """Isolated cache directory for each test."""
    path = tmp_path / "cache"
    path.mkdir(parents=True, exist_ok=True)
    return path
