from __future__ import annotations

import pytest

from contact_csv.models import Cadence, ContactRecord, Role, make_tags


@pytest.fixture()
def ada() -> ContactRecord:
    return ContactRecord(
        name="Ada Lovelace",
        phone="91234567",
        email="ada@example.com",
        address="12 Analytical Way",
        role=Role.INVESTOR,
        tags=make_tags(["vip", "key_client"]),
        cadence=Cadence(14),
    )


@pytest.fixture()
def grace() -> ContactRecord:
    return ContactRecord(
        name="Grace Hopper",
        phone="98765432",
        email="grace@navy.example.org",
        address="1 Harbour Road",
        role=Role.PARTNER,
    )
