"""
Shared pytest fixtures.
"""
import logging

import pytest

from rest_schema import FieldType, ListField, ObjectField, ScalarField, Schema
from rest_schema.utils.logging_utils import PACKAGE_LOGGER_NAME


@pytest.fixture
def person_schema():
    return Schema({
        "name": ScalarField(FieldType.STRING, True),
        "age": ScalarField(FieldType.NUMBER),
    })


@pytest.fixture
def user_schema():
    return Schema(
        {
            "name": ScalarField(FieldType.STRING, True),
            "age": ScalarField(FieldType.NUMBER, True),
            "address": ObjectField({
                "street": ScalarField(FieldType.STRING, True, "Street Address"),
                "city": ScalarField(FieldType.STRING),
            }),
            "tags": ListField(ScalarField(FieldType.STRING, True), description="Free-form tags"),
        },
        description="A registered user",
    )


@pytest.fixture
def valid_user():
    return {
        "name": "John",
        "age": 30,
        "address": {"street": "123 Main St", "city": "Anywhere"},
        "tags": ["admin"],
    }


@pytest.fixture(autouse=True)
def reset_package_logger():
    """Drop stream handlers bound to captured streams between tests."""
    yield
    package_logger = logging.getLogger(PACKAGE_LOGGER_NAME)
    package_logger.handlers.clear()
    package_logger.setLevel(logging.NOTSET)
