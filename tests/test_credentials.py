import pytest

from ampexport.constants import API_KEY_ENV, SECRET_KEY_ENV
from ampexport.export.credentials import Credentials
from ampexport.export.errors import MissingCredentialsError


def test_from_env_reads_both_values() -> None:
    creds = Credentials.from_env({API_KEY_ENV: "key", SECRET_KEY_ENV: "secret"})
    assert creds.as_auth() == ("key", "secret")


def test_from_env_uses_process_environment(credential_env: None) -> None:
    assert Credentials.from_env().as_auth() == ("test-api-key", "test-secret-key")


@pytest.mark.parametrize(
    "environ, missing",
    [
        ({}, API_KEY_ENV),
        ({API_KEY_ENV: "key"}, SECRET_KEY_ENV),
        ({API_KEY_ENV: "", SECRET_KEY_ENV: "secret"}, API_KEY_ENV),
        ({API_KEY_ENV: "key", SECRET_KEY_ENV: ""}, SECRET_KEY_ENV),
    ],
)
def test_from_env_missing_value(environ: dict[str, str], missing: str) -> None:
    with pytest.raises(MissingCredentialsError) as excinfo:
        Credentials.from_env(environ)
    assert excinfo.value.variable == missing


def test_secret_hidden_from_repr() -> None:
    creds = Credentials(api_key="key", secret_key="very-secret")
    assert "very-secret" not in repr(creds)
    assert "very-secret" not in str(creds)
