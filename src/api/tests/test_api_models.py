"""Tests for API request/response models."""

import unittest
from datetime import date, datetime, timezone

from pydantic import ValidationError

from api.models import AccountResponse, RegisterRequest, UpdateProfileRequest
from domain.model.account import Account, Gender

NOW = datetime(2024, 6, 1, tzinfo=timezone.utc)


class TestRegisterRequest(unittest.TestCase):

    def test_camel_case_input_and_domain_conversion(self):
        request = RegisterRequest.model_validate({
            "email": "john@example.com",
            "firstName": "John",
            "lastName": "Doe",
            "password": "password123",
        })

        registration = request.to_domain()
        self.assertEqual(registration.first_name, "John")
        self.assertEqual(registration.password, "password123")

    def test_password_length_bounds(self):
        base = {"email": "john@example.com", "firstName": "John", "lastName": "Doe"}

        RegisterRequest.model_validate(dict(base, password="x" * 6))
        RegisterRequest.model_validate(dict(base, password="x" * 72))
        with self.assertRaises(ValidationError):
            RegisterRequest.model_validate(dict(base, password="x" * 5))
        with self.assertRaises(ValidationError):
            RegisterRequest.model_validate(dict(base, password="x" * 73))


class TestUpdateProfileRequest(unittest.TestCase):

    def test_changes_only_contain_sent_fields(self):
        request = UpdateProfileRequest.model_validate({"city": "Berlin", "gender": None, "isActive": False})

        self.assertEqual(request.changes(), {"city": "Berlin", "gender": None, "is_active": False})

    def test_list_limits(self):
        UpdateProfileRequest.model_validate({"interests": ["x"] * 10, "skills": ["y"] * 20})
        with self.assertRaises(ValidationError):
            UpdateProfileRequest.model_validate({"interests": ["x"] * 11})
        with self.assertRaises(ValidationError):
            UpdateProfileRequest.model_validate({"skills": ["y" * 51]})

    def test_is_active_cannot_be_null(self):
        with self.assertRaises(ValidationError):
            UpdateProfileRequest.model_validate({"isActive": None})

    def test_unknown_field_forbidden(self):
        with self.assertRaises(ValidationError):
            UpdateProfileRequest.model_validate({"passwordHash": "x"})


class TestAccountResponse(unittest.TestCase):

    def test_serializes_camel_case_without_password(self):
        account = Account(
            id="u1", email="a@example.com", first_name="A", last_name="B",
            created_at=NOW, updated_at=NOW, password_hash="secret",
            date_of_birth=date(1990, 5, 1), gender=Gender.OTHER,
        )

        data = AccountResponse.from_domain(account).model_dump(mode="json", by_alias=True)

        self.assertEqual(data["firstName"], "A")
        self.assertEqual(data["dateOfBirth"], "1990-05-01")
        self.assertEqual(data["gender"], "other")
        self.assertIsNone(data["lastLoginAt"])
        self.assertNotIn("passwordHash", data)
        self.assertNotIn("password_hash", data)


if __name__ == '__main__':
    unittest.main()
