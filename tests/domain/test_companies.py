from __future__ import annotations

import pytest

from questlog.domain.companies import (
    company_role,
    company_slug,
    narrow_companies,
    normalize_company_name,
)
from questlog.domain.model import CompanyDigest, CompanyRole


@pytest.mark.parametrize(
    ("name", "normalized"),
    [
        ("Ubisoft Montreal", "Ubisoft"),
        ("Bethesda Game Studios", "Bethesda"),
        ("CD Projekt Red S.A.", "CD Projekt Red SA"),
        ("Interactive Studios", "Interactive Studios"),
    ],
)
def test_normalize_company_name(name: str, normalized: str) -> None:
    assert normalize_company_name(name) == normalized


def test_company_slug_is_stable_across_suffixes() -> None:
    assert company_slug("Valve Corporation") == company_slug("Valve") == "valve"


@pytest.mark.parametrize(
    ("flags", "role"),
    [
        ((True, True, False, False), CompanyRole.DEV_PUB),
        ((True, False, True, False), CompanyRole.DEVELOPER),
        ((False, True, False, False), CompanyRole.PUBLISHER),
        ((False, False, True, True), CompanyRole.PORTING),
        ((False, False, False, True), CompanyRole.SUPPORT),
        ((False, False, False, False), CompanyRole.UNKNOWN),
    ],
)
def test_company_role(flags: tuple[bool, bool, bool, bool], role: CompanyRole) -> None:
    developer, publisher, porting, supporting = flags

    assert (
        company_role(
            developer=developer, publisher=publisher, porting=porting, supporting=supporting
        )
        is role
    )


def _company(company_id: int, name: str) -> CompanyDigest:
    return CompanyDigest(id=company_id, name=name, slug=company_slug(name))


def test_narrow_companies_keeps_subset_listed_by_store() -> None:
    companies = [_company(1, "Valve Corporation"), _company(2, "Hidden Path Entertainment")]

    narrowed = narrow_companies(companies, ["Valve"])

    assert [company.id for company in narrowed] == [1]


def test_narrow_companies_never_empties_the_list() -> None:
    companies = [_company(1, "Valve Corporation")]

    assert narrow_companies(companies, ["Someone Else"]) == companies
    assert narrow_companies(companies, []) == companies
