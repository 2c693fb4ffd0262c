"""
Command Line Tests

Covers argument and environment resolution, validation before any network
use, output formats and exit codes of ``permit_signer.cli.main``.

Usage:
    pytest tests/test_cli/test_cli.py -v
"""

import json
from unittest.mock import Mock

import pytest

from test_mocks import (
    MOCK_OWNER_PRIVATE_KEY,
    MOCK_OWNER_ADDRESS,
    MOCK_SPENDER_ADDRESS,
    MOCK_USDC_SEPOLIA,
    MOCK_RPC_URL,
    MockWeb3Provider,
)

from permit_signer import cli
from permit_signer.adapters.evm.adapter import PermitSigner
from permit_signer.engine.exceptions import InvalidArgumentError, MissingArgumentError


FULL_ARGS = [
    "--rpc", MOCK_RPC_URL,
    "--pk", MOCK_OWNER_PRIVATE_KEY,
    "--token", MOCK_USDC_SEPOLIA,
    "--spender", MOCK_SPENDER_ADDRESS,
    "--value", "1000000",
    "--deadline", "2000000000",
]


def without(flag):
    """FULL_ARGS minus ``flag`` and its value."""
    index = FULL_ARGS.index(flag)
    return FULL_ARGS[:index] + FULL_ARGS[index + 2:]


def replace(flag, value):
    args = list(FULL_ARGS)
    args[args.index(flag) + 1] = value
    return args


# ========================================================================
# Test Fixtures
# ========================================================================

@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Start every test without env fallbacks."""
    for key in ("RPC_URL", "PRIVATE_KEY", "RPC_TIMEOUT", "LOG_LEVEL"):
        monkeypatch.delenv(key, raising=False)


@pytest.fixture
def signer_factory(monkeypatch):
    """Replace the CLI's PermitSigner with one bound to a mock provider."""
    created = []

    def factory(**kwargs):
        signer = PermitSigner(w3=MockWeb3Provider(), **kwargs)
        created.append((kwargs, signer))
        return signer

    monkeypatch.setattr(cli, "PermitSigner", factory)
    return created


@pytest.fixture
def no_network(monkeypatch):
    """Fail loudly if the CLI tries to build a signer."""
    guard = Mock(side_effect=AssertionError("network used"))
    monkeypatch.setattr(cli, "PermitSigner", guard)
    return guard


# ========================================================================
# Argument Resolution
# ========================================================================

class TestMissingArguments:
    """Missing inputs exit 1 before any network use."""

    @pytest.mark.parametrize(
        "flag", ["--rpc", "--pk", "--token", "--spender", "--value", "--deadline"]
    )
    def test_missing_flag_exits_nonzero(self, flag, no_network, capsys):
        exit_code = cli.main(without(flag))

        assert exit_code == 1
        assert f"Missing {flag}" in capsys.readouterr().err
        no_network.assert_not_called()

    def test_first_missing_reported(self, no_network, capsys):
        assert cli.main([]) == 1
        assert "Missing --rpc" in capsys.readouterr().err

    def test_empty_value_counts_as_missing(self, no_network):
        assert cli.main(replace("--spender", "")) == 1
        no_network.assert_not_called()

    @pytest.mark.parametrize("flag", ["--deadline", "--domain-version"])
    def test_trailing_flag_without_value(self, flag, no_network, capsys):
        argv = without("--deadline") + [flag] if flag == "--deadline" else FULL_ARGS + [flag]

        assert cli.main(argv) == 1
        assert f"Missing {flag}" in capsys.readouterr().err
        no_network.assert_not_called()

    def test_flag_followed_by_flag(self, no_network, capsys):
        assert cli.main(without("--deadline") + ["--deadline", "--json"]) == 1
        assert "Missing --deadline" in capsys.readouterr().err

    def test_unknown_flag_exits_one(self, no_network, capsys):
        assert cli.main(FULL_ARGS + ["--bogus"]) == 1
        assert "--bogus" in capsys.readouterr().err

    def test_error_reported_at_any_log_level(self, no_network, capsys):
        assert cli.main(without("--deadline") + ["--log-level", "CRITICAL"]) == 1
        assert "Missing --deadline" in capsys.readouterr().err

    def test_error_reported_with_env_log_level(self, no_network, monkeypatch, capsys):
        monkeypatch.setenv("LOG_LEVEL", "CRITICAL")
        assert cli.main(without("--deadline")) == 1
        assert capsys.readouterr().err.strip() != ""

    def test_parser_raises_instead_of_exiting(self):
        with pytest.raises(MissingArgumentError) as exc_info:
            cli.build_parser().parse_args(["--value"])
        assert exc_info.value.name == "value"

    def test_resolve_raises_missing_argument(self):
        args = cli.build_parser().parse_args(without("--deadline"))
        with pytest.raises(MissingArgumentError) as exc_info:
            cli.resolve_arguments(args)
        assert exc_info.value.name == "deadline"


class TestEnvironmentFallback:
    """RPC_URL and PRIVATE_KEY stand in for --rpc and --pk."""

    def test_env_used_when_flags_absent(self, monkeypatch):
        monkeypatch.setenv("RPC_URL", MOCK_RPC_URL)
        monkeypatch.setenv("PRIVATE_KEY", MOCK_OWNER_PRIVATE_KEY)
        args = cli.build_parser().parse_args(without("--pk")[2:])

        params = cli.resolve_arguments(args)

        assert params.rpc_url == MOCK_RPC_URL
        assert params.private_key == MOCK_OWNER_PRIVATE_KEY

    def test_flags_override_env(self, monkeypatch):
        monkeypatch.setenv("RPC_URL", "http://env:8545")
        args = cli.build_parser().parse_args(FULL_ARGS)
        assert cli.resolve_arguments(args).rpc_url == MOCK_RPC_URL

    def test_env_timeout(self, monkeypatch):
        monkeypatch.setenv("RPC_TIMEOUT", "7")
        args = cli.build_parser().parse_args(FULL_ARGS)
        assert cli.resolve_arguments(args).timeout == 7

    def test_bad_env_timeout(self, monkeypatch):
        monkeypatch.setenv("RPC_TIMEOUT", "soon")
        args = cli.build_parser().parse_args(FULL_ARGS)
        with pytest.raises(InvalidArgumentError):
            cli.resolve_arguments(args)

    def test_private_key_not_in_repr(self):
        params = cli.resolve_arguments(cli.build_parser().parse_args(FULL_ARGS))
        assert MOCK_OWNER_PRIVATE_KEY not in repr(params)
        assert "private_key" not in params.to_canonical_json()


class TestValidation:
    """Malformed inputs exit 1 before any network use."""

    @pytest.mark.parametrize(
        "flag,value",
        [
            ("--value", "ten"),
            ("--value", "-1"),
            ("--value", str(2**256)),
            ("--deadline", "1.5"),
            ("--token", "0x1234"),
            ("--spender", "not-an-address"),
            ("--pk", "0x1234"),
            ("--timeout", "0"),
        ],
    )
    def test_invalid_input_exits_nonzero(self, flag, value, no_network):
        argv = FULL_ARGS + [flag, value] if flag == "--timeout" else replace(flag, value)
        assert cli.main(argv) == 1
        no_network.assert_not_called()

    def test_bad_key_not_echoed(self, no_network, caplog, capsys):
        bad_key = "0x" + "zz" * 32
        with caplog.at_level("DEBUG", logger="permit_signer"):
            assert cli.main(replace("--pk", bad_key) + ["--log-level", "DEBUG"]) == 1
        assert bad_key not in caplog.text
        assert bad_key not in capsys.readouterr().err

    def test_non_integer_timeout_exits_one(self, no_network, capsys):
        assert cli.main(FULL_ARGS + ["--timeout", "soon"]) == 1
        assert "--timeout" in capsys.readouterr().err

    def test_parse_uint256(self):
        assert cli.parse_uint256("value", "1000000") == 1000000
        assert cli.parse_uint256("value", "0x10") == 16
        assert cli.parse_uint256("value", "0XfF") == 255
        assert cli.parse_uint256("value", " 42 ") == 42
        assert cli.parse_uint256("value", str(2**256 - 1)) == 2**256 - 1

    @pytest.mark.parametrize(
        "raw",
        ["1_000", "0x_10", "١٢٣", "+5", "0x", "", "1e6", "0b101"],
    )
    def test_parse_uint256_rejects_non_plain_digits(self, raw):
        with pytest.raises(InvalidArgumentError):
            cli.parse_uint256("value", raw)

    def test_parse_address_checksums(self):
        assert cli.parse_address("token", MOCK_USDC_SEPOLIA.lower()) == MOCK_USDC_SEPOLIA

    def test_parse_address_rejects_bad_checksum(self):
        bad = MOCK_USDC_SEPOLIA[:2] + MOCK_USDC_SEPOLIA[2:].swapcase()
        with pytest.raises(InvalidArgumentError):
            cli.parse_address("token", bad)


# ========================================================================
# Signing and Output
# ========================================================================

class TestOutput:
    """Successful runs print the result and exit 0."""

    def test_text_output(self, signer_factory, capsys):
        assert cli.main(FULL_ARGS) == 0

        out = capsys.readouterr().out
        lines = dict(
            (key.strip(), value.strip())
            for key, value in (line.split(":", 1) for line in out.strip().splitlines())
        )
        assert list(lines) == ["owner", "recovered", "digest", "signature", "v", "r", "s"]
        assert lines["owner"] == MOCK_OWNER_ADDRESS
        assert lines["recovered"] == MOCK_OWNER_ADDRESS
        assert lines["v"] in ("27", "28")
        assert lines["digest"].startswith("0x") and len(lines["digest"]) == 66

    def test_json_output(self, signer_factory, capsys):
        assert cli.main(FULL_ARGS + ["--json"]) == 0

        data = json.loads(capsys.readouterr().out)
        assert data["owner"] == data["recovered"] == MOCK_OWNER_ADDRESS
        assert len(data["signature"]) == 132
        assert "domain_separator_match" not in data

    def test_signer_receives_resolved_arguments(self, signer_factory):
        assert cli.main(FULL_ARGS + ["--timeout", "9"]) == 0

        kwargs, _ = signer_factory[0]
        assert kwargs == {
            "private_key": MOCK_OWNER_PRIVATE_KEY,
            "rpc_url": MOCK_RPC_URL,
            "request_timeout": 9,
        }

    def test_deterministic_output(self, signer_factory, capsys):
        assert cli.main(FULL_ARGS + ["--json"]) == 0
        first = json.loads(capsys.readouterr().out)
        assert cli.main(FULL_ARGS + ["--json"]) == 0
        second = json.loads(capsys.readouterr().out)
        assert first == second

    def test_check_domain_flag(self, signer_factory, capsys):
        assert cli.main(FULL_ARGS + ["--json", "--check-domain"]) == 0
        # The mock token has no DOMAIN_SEPARATOR(); the run still succeeds.
        assert "domain_separator_match" not in json.loads(capsys.readouterr().out)

    def test_downstream_error_exits_nonzero(self, monkeypatch, capsys):
        def factory(**kwargs):
            w3 = MockWeb3Provider(mock_chain_error=ConnectionError("connection refused"))
            return PermitSigner(w3=w3, **kwargs)

        monkeypatch.setattr(cli, "PermitSigner", factory)
        assert cli.main(FULL_ARGS) == 1

        captured = capsys.readouterr()
        assert captured.out == ""
        assert "ConnectionError: connection refused" in captured.err
