"""CLI tests for customers command group."""
from unittest.mock import AsyncMock, MagicMock, patch

from typer.testing import CliRunner

from conftest import mock_build
from storefront_client.commands.customers_cmd import app
from storefront_client.errors import ForbiddenError
from storefront_client.models.customers import Customer, Page

runner = CliRunner()

BUILD = "storefront_client.commands.customers_cmd._build_client"

JANE = Customer(id="u1", email="jane@example.com", first_name="Jane", last_name="Doe")


def _service():
    svc = MagicMock()
    svc.list = AsyncMock(return_value=Page[Customer](
        content=[JANE], total_pages=3, total_elements=21, current_page=1,
    ))
    svc.list_all = AsyncMock(return_value=[JANE, JANE])
    svc.delete = AsyncMock(return_value=None)
    svc.update_status = AsyncMock(return_value=None)
    return svc


def test_list_page():
    svc = _service()
    with patch(BUILD, return_value=mock_build(svc)):
        result = runner.invoke(app, ["list", "--page", "1", "--size", "10", "-o", "json"])
    assert result.exit_code == 0
    assert "jane@example.com" in result.stdout
    svc.list.assert_awaited_once_with(1, 10)


def test_list_all():
    svc = _service()
    with patch(BUILD, return_value=mock_build(svc)):
        result = runner.invoke(app, ["list", "--all", "-o", "json"])
    assert result.exit_code == 0
    svc.list_all.assert_awaited_once_with(size=10)
    svc.list.assert_not_called()


def test_list_refused_for_customer():
    svc = _service()
    client, _ = built = mock_build(svc, admin=False)
    with patch(BUILD, return_value=built):
        result = runner.invoke(app, ["list"])
    assert result.exit_code == 1
    assert "Admin account required" in result.stdout
    svc.list.assert_not_called()
    client.aclose.assert_awaited_once()


def test_list_server_forbidden():
    svc = _service()
    svc.list = AsyncMock(side_effect=ForbiddenError())
    with patch(BUILD, return_value=mock_build(svc)):
        result = runner.invoke(app, ["list"])
    assert result.exit_code == 1
    assert "FORBIDDEN" in result.stdout


def test_delete_with_yes():
    svc = _service()
    with patch(BUILD, return_value=mock_build(svc)):
        result = runner.invoke(app, ["delete", "u1", "--yes", "-o", "json"])
    assert result.exit_code == 0
    svc.delete.assert_awaited_once_with("u1")


def test_status_inactive():
    svc = _service()
    with patch(BUILD, return_value=mock_build(svc)):
        result = runner.invoke(app, ["status", "u1", "--inactive", "-o", "json"])
    assert result.exit_code == 0
    svc.update_status.assert_awaited_once_with("u1", False)
    assert '"active": false' in result.stdout
