"""CLI tests — commands that need no running server."""

import uuid

from click.testing import CliRunner

from clientdesk import __version__
from clientdesk.auth.jwt import verify_session_token
from clientdesk.cli.main import main


def test_version():
    result = CliRunner().invoke(main, ["--version"])
    assert result.exit_code == 0
    assert __version__ in result.output


def test_issue_token_is_verifiable():
    user_id = uuid.uuid4()
    result = CliRunner().invoke(main, ["issue-token", str(user_id)])
    assert result.exit_code == 0
    assert verify_session_token(result.output.strip()) == user_id


def test_issue_token_rejects_bad_uuid():
    result = CliRunner().invoke(main, ["issue-token", "not-a-uuid"])
    assert result.exit_code != 0


def test_create_user_rejects_short_password():
    result = CliRunner().invoke(
        main, ["create-user", "a@example.com", "Ada", "--password", "short"]
    )
    assert result.exit_code == 1
    assert "at least 8 characters" in result.output
