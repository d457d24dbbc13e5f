"""Unit tests for github_client.auth module."""

import pytest
from unittest.mock import patch
from src.github_client.auth import Authenticator, Credentials
from src.github_client.errors import InvalidCredentialsError


ENV = {
    'GITHUB_TOKEN': 'ghp_testtoken123',
    'GITHUB_OWNER': 'octo',
    'GITHUB_REPO': 'docs',
}


class TestCredentials:
    """Test cases for Credentials NamedTuple."""

    def test_credentials_creation(self):
        """Credentials can be created with token, owner, and repo."""
        creds = Credentials(token="t", owner="octo", repo="docs")
        assert creds.token == "t"
        assert creds.owner == "octo"
        assert creds.repo == "docs"

    def test_credentials_are_immutable(self):
        """Credentials fields cannot be modified after creation."""
        creds = Credentials(token="t", owner="octo", repo="docs")
        with pytest.raises(AttributeError):
            creds.repo = "other"


class TestAuthenticator:
    """Test cases for Authenticator class."""

    @patch('src.github_client.auth.load_dotenv')
    def test_init_loads_dotenv(self, mock_load_dotenv):
        """Authenticator __init__ should call load_dotenv()."""
        Authenticator()
        mock_load_dotenv.assert_called_once()

    @patch('src.github_client.auth.load_dotenv')
    @patch('os.getenv')
    def test_get_credentials_from_environment(self, mock_getenv, mock_load_dotenv):
        """get_credentials should return Credentials when all env vars are set."""
        mock_getenv.side_effect = ENV.get

        creds = Authenticator().get_credentials()

        assert creds == Credentials(token='ghp_testtoken123', owner='octo', repo='docs')

    @patch('src.github_client.auth.load_dotenv')
    @patch('os.getenv')
    def test_explicit_values_take_precedence(self, mock_getenv, mock_load_dotenv):
        """Constructor arguments override environment variables."""
        mock_getenv.side_effect = ENV.get

        creds = Authenticator(owner='someone', repo='site').get_credentials()

        assert creds.token == 'ghp_testtoken123'
        assert creds.owner == 'someone'
        assert creds.repo == 'site'

    @patch('src.github_client.auth.load_dotenv')
    @patch('os.getenv')
    def test_missing_token_raises(self, mock_getenv, mock_load_dotenv):
        """get_credentials should raise InvalidCredentialsError if the token is missing."""
        env = dict(ENV, GITHUB_TOKEN=None)
        mock_getenv.side_effect = env.get

        with pytest.raises(InvalidCredentialsError) as exc_info:
            Authenticator().get_credentials()

        assert exc_info.value.missing == ['GITHUB_TOKEN']
        assert 'GITHUB_TOKEN' in str(exc_info.value)
        assert exc_info.value.owner == 'octo'

    @patch('src.github_client.auth.load_dotenv')
    @patch('os.getenv')
    def test_all_missing_are_reported(self, mock_getenv, mock_load_dotenv):
        """Every missing variable is listed, with unknown repository coordinates."""
        mock_getenv.return_value = None

        with pytest.raises(InvalidCredentialsError) as exc_info:
            Authenticator().get_credentials()

        assert exc_info.value.missing == ['GITHUB_TOKEN', 'GITHUB_OWNER', 'GITHUB_REPO']
        assert exc_info.value.owner == 'unknown'
        assert exc_info.value.repo == 'unknown'

    @patch('src.github_client.auth.load_dotenv')
    @patch('os.getenv')
    def test_token_never_in_error_message(self, mock_getenv, mock_load_dotenv):
        """The token value does not leak into credential errors."""
        env = dict(ENV, GITHUB_REPO=None)
        mock_getenv.side_effect = env.get

        with pytest.raises(InvalidCredentialsError) as exc_info:
            Authenticator().get_credentials()

        assert 'ghp_testtoken123' not in str(exc_info.value)
