"""Tests for the command-line entry point."""

import json

import httpx
import pytest

from conftest import FIXED_NOW, RecordingTransport, make_settings
from expensify_partner import ExpensifyClient
from expensify_partner.sso import decrypt_sso_token
from main import build_parser, main, run


@pytest.fixture
def transport():
    """A transport that answers every post with 200."""
    return RecordingTransport(200, '{"ok":true}')


@pytest.fixture
def client(transport):
    """A client wired to the recording transport."""
    return ExpensifyClient(
        make_settings(),
        http_client=httpx.Client(transport=transport),
        clock=lambda: FIXED_NOW,
    )


def _run(client, *argv):
    return run(build_parser().parse_args(list(argv)), client)


class TestRun:
    """Tests for command dispatch."""

    def test_sso(self, client):
        """Test that the sso command prints a token for the secret."""
        token = _run(client, "sso", "--user-secret", "test1324")
        assert decrypt_sso_token(client.settings, token).partner_user_secret == "test1324"

    def test_auth_url(self, client):
        """Test that the auth-url command prints the Auth URL."""
        url = _run(client, "auth-url", "--sso", "abc", "--partner-user-id", "u1", "--exit-to", "http://x")
        assert url == "https://expensify.test/api/v1/?action=Auth&sso=abc&partnerName=acme&partnerUserID=u1&exitTo=http://x"

    def test_create_expense(self, client, transport):
        """Test that create-expense posts the expense."""
        body = _run(
            client,
            "create-expense",
            "--sso", "abc",
            "--partner-user-id", "u1",
            "--created", "2015-04-07",
            "--merchant", "Tire Emporium",
            "--amount", "2299",
            "--currency", "USD",
        )

        assert body == '{"ok":true}'
        assert json.loads(transport.form()["distanceTransaction"])["amount"] == 2299

    def test_create_distance(self, client, transport):
        """Test that create-distance posts the trip."""
        _run(
            client,
            "create-distance",
            "--sso", "abc",
            "--partner-user-id", "u1",
            "--created", "2015-04-07",
            "--distance", "4.5",
            "--units", "Km",
        )

        assert json.loads(transport.form()["distanceTransaction"]) == {
            "created": "2015-04-07",
            "distance": 4.5,
            "units": "Km",
        }

    def test_upload_receipt_reads_file(self, client, transport, tmp_path):
        """Test that upload-receipt sends the file contents."""
        receipt = tmp_path / "receipt.pdf"
        receipt.write_bytes(b"%PDF-1.4 receipt")

        _run(
            client,
            "upload-receipt",
            "--sso", "abc",
            "--partner-user-id", "u1",
            "--created", "2015-04-07",
            "--file", str(receipt),
            "--content-type", "application/pdf",
        )

        content = transport.requests[0].content
        assert b'filename="receipt.pdf"' in content
        assert b"%PDF-1.4 receipt" in content

    def test_fetch_receipt(self, client, transport):
        """Test that fetch-receipt sends the receipt URL."""
        _run(
            client,
            "fetch-receipt",
            "--sso", "abc",
            "--partner-user-id", "u1",
            "--created", "2015-04-07",
            "--receipt-url", "https://example.com/r.png",
        )

        assert transport.form()["receiptURL"] == "https://example.com/r.png"


class TestMain:
    """Tests for exit codes and error output."""

    def test_configuration_error_exits_1(self, monkeypatch, capsys):
        """Test that a missing credential exits 1 with a message."""
        monkeypatch.setattr("main.ExpensifySettings", lambda: make_settings(partner_password=""))

        assert main(["sso", "--user-secret", "s"]) == 1
        assert "Error: No Expensify partner password provided" in capsys.readouterr().err

    def test_prints_result(self, monkeypatch, capsys):
        """Test that a successful command prints its result and exits 0."""
        monkeypatch.setattr("main.ExpensifySettings", lambda: make_settings())

        assert main(["auth-url", "--sso", "abc", "--partner-user-id", "u1"]) == 0
        assert "action=Auth&sso=abc" in capsys.readouterr().out

    def test_invalid_setting_exits_1(self, monkeypatch, capsys):
        """Test that an unparseable setting exits 1 instead of a traceback."""
        monkeypatch.setenv("EXPENSIFY_TIMEOUT", "abc")

        assert main(["auth-url", "--sso", "abc", "--partner-user-id", "u1"]) == 1
        assert "Error:" in capsys.readouterr().err
