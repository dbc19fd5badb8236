import pytest

from powerbi_resources.errors import IdentifierNotFoundError, IdentityResolutionError
from powerbi_resources.identity import MemberId, resolve_principal_key


class TestMemberId:
    def test_format(self):
        assert MemberId("Proj", "a@b.com").format() == "Proj/a@b.com"
        assert str(MemberId("Proj", "a@b.com")) == "Proj/a@b.com"

    @pytest.mark.parametrize("workspace, key", [
        ("Proj", "a@b.com"),
        ("Sales Team", "5f3c1d2e-0000-4000-8000-000000000001"),
        ("Q1 #2", "group-id"),
    ])
    def test_parse_recovers_parts(self, workspace, key):
        parsed = MemberId.parse(MemberId(workspace, key).format())
        assert parsed == MemberId(workspace, key)

    def test_parse_splits_on_first_separator(self):
        parsed = MemberId.parse("Proj/a/b")
        assert parsed.workspace_name == "Proj"
        assert parsed.principal_key == "a/b"

    @pytest.mark.parametrize("raw, expected", [
        ("", MemberId("", "")),
        ("Proj", MemberId("Proj", "")),
        ("Proj/", MemberId("Proj", "")),
        ("/a@b.com", MemberId("", "a@b.com")),
    ])
    def test_parse_unparsable_yields_empty_parts(self, raw, expected):
        assert MemberId.parse(raw) == expected


class TestResolvePrincipalKey:
    def test_identifier_wins(self):
        assert resolve_principal_key("app-id", "a@b.com", "fallback") == "app-id"

    def test_email_when_identifier_empty(self):
        assert resolve_principal_key("", "a@b.com", "fallback") == "a@b.com"

    def test_fallback_last(self):
        assert resolve_principal_key("", "", "fallback") == "fallback"

    def test_all_empty_raises(self):
        with pytest.raises(IdentifierNotFoundError, match="could not determine identifier"):
            resolve_principal_key("", "", "")

    def test_error_is_identity_resolution_error(self):
        with pytest.raises(IdentityResolutionError):
            resolve_principal_key()
