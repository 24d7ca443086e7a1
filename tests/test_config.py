import dataclasses

import pytest

from thecity import __version__
from thecity.config import Config
from thecity.errors import ConfigurationError
from thecity.version import Version


def test_defaults() -> None:
    config = Config()

    assert config.base_url == 'https://api.onthecity.org'
    assert config.access_token is None
    assert config.user_agent == f'thecity-python/{__version__}'


def test_is_immutable() -> None:
    with pytest.raises(dataclasses.FrozenInstanceError):
        Config().timeout = 1.0  # type: ignore[misc]


def test_headers() -> None:
    assert Config(user_agent='ua').headers() == {'User-Agent': 'ua', 'Accept': 'application/json'}
    assert Config(access_token='secret').headers()['Authorization'] == 'Bearer secret'


def test_from_env_reads_values() -> None:
    config = Config.from_env(
        {
            'THECITY_BASE_URL': 'https://api.example.test/',
            'THECITY_ACCESS_TOKEN': 'secret',
            'THECITY_USER_AGENT': 'custom-agent',
            'THECITY_TIMEOUT': '30',
            'THECITY_MAX_RETRIES': ' 5 ',
        }
    )

    assert config.base_url == 'https://api.example.test'
    assert config.access_token == 'secret'
    assert config.user_agent == 'custom-agent'
    assert config.timeout == 30.0
    assert config.max_retries == 5
    assert config.retry_max_delay == 60.0


def test_from_env_reads_process_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv('THECITY_ACCESS_TOKEN', 'from-env')

    assert Config.from_env().access_token == 'from-env'


def test_from_env_skips_empty_values() -> None:
    assert Config.from_env({'THECITY_TIMEOUT': ''}).timeout == 20.0


def test_from_env_rejects_unreadable_numbers() -> None:
    with pytest.raises(ConfigurationError, match='THECITY_MAX_RETRIES is not a valid int'):
        Config.from_env({'THECITY_MAX_RETRIES': 'many'})


def test_from_env_validates_values() -> None:
    with pytest.raises(ConfigurationError, match='http'):
        Config.from_env({'THECITY_BASE_URL': 'ftp://example.test'})


@pytest.mark.parametrize(
    ('kwargs', 'message'),
    [
        ({'base_url': 'not-a-url'}, 'absolute http'),
        ({'base_url': 'ftp://example.test'}, 'absolute http'),
        ({'timeout': -1}, 'timeout must be positive'),
        ({'max_retries': -1}, 'max_retries must be non-negative'),
        ({'retry_base_delay': 0}, 'retry delays'),
        ({'retry_base_delay': 10.0, 'retry_max_delay': 5.0}, 'retry delays'),
    ],
)
def test_validation(kwargs: dict, message: str) -> None:
    with pytest.raises(ConfigurationError, match=message):
        Config(**kwargs)


def test_configuration_error_is_value_error() -> None:
    with pytest.raises(ValueError):
        Config(timeout=0)


def test_version_string() -> None:
    assert Version.to_string() == '0.0.9'


def test_package_version_matches_version_class() -> None:
    assert __version__ == Version.to_string()
