"""Role routing and account construction."""
from __future__ import annotations

import uuid

import pytest

from vergolf.models import ROLE_ROUTES, ROLES, ProfileForm, dashboard_path
from vergolf.services import account_from_form, account_to_dict


@pytest.mark.parametrize("role", ROLES)
def test_every_role_has_a_dashboard(role):
    assert ROLE_ROUTES[role] == f"/dashboard/{role}"
    assert dashboard_path(role) == f"/dashboard/{role}"


@pytest.mark.parametrize("role", [None, "", "admin"])
def test_unknown_role_falls_back_to_golfer(role):
    assert dashboard_path(role) == "/dashboard/golfer"


def test_pro_account_from_form():
    form = ProfileForm.model_validate(
        {
            "name": "  Arthit  ",
            "phone": "0899999999",
            "account_type": "pro",
            "certification": "PGA Thailand",
            "specialties": ["short game"],
            "lesson_rate": 1500,
            "hourly_rate": 300,
        }
    )
    identity_id = uuid.uuid4()

    account = account_from_form(identity_id, form, email="arthit@example.com", aiverid="AIV-5")

    assert account.id == identity_id
    assert account.name == "Arthit"
    assert account.role == "pro"
    assert account.certification == "PGA Thailand"
    assert account.specialties == ["short game"]
    assert account.hourly_rate is None
    assert account_to_dict(account)["lesson_rate"] == 1500
