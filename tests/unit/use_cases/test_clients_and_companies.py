"""Unit tests for client and company use cases

Tests cover:
- Clients with orders cannot be deleted
- Setting a default company clears the previous default
- The first company becomes the default
- Companies with open invoices cannot be deactivated
"""

import pytest
from unittest.mock import AsyncMock, MagicMock

from src.app.use_cases.clients.delete_client import DeleteClient
from src.app.use_cases.companies.create_company import CreateCompany
from src.app.use_cases.companies.deactivate_company import DeactivateCompany
from src.app.use_cases.companies.dtos import CreateCompanyCommandDTO, UpdateCompanyCommandDTO
from src.app.use_cases.companies.get_company import GetCompany
from src.app.use_cases.companies.set_default_company import SetDefaultCompany
from src.app.use_cases.companies.update_company import UpdateCompany
from src.domain.client import Client
from src.domain.company import Company


@pytest.fixture
def mock_client_repo():
    repo = MagicMock()
    repo.get_by_id = AsyncMock(return_value=Client(id=1, name="Acme Corp", email="billing@acme.test"))
    repo.count_orders = AsyncMock(return_value=0)
    repo.delete = AsyncMock()
    return repo


@pytest.fixture
def mock_company_repo():
    repo = MagicMock()
    repo.get_by_id = AsyncMock(
        return_value=Company(id=2, name="Billing Co", email="ar@billing.test", is_default=False, is_active=False)
    )
    repo.clear_default = AsyncMock()
    repo.update = AsyncMock(side_effect=lambda c: c)
    repo.list_all = AsyncMock(return_value=[])
    repo.count_open_invoices = AsyncMock(return_value=0)

    async def create(company):
        company.id = 3
        return company

    repo.create = AsyncMock(side_effect=create)
    return repo


@pytest.mark.asyncio
class TestDeleteClient:
    """Test client deletion"""

    async def test_client_without_orders(self, mock_uow, mock_client_repo):
        result = await DeleteClient(mock_uow, mock_client_repo).execute(1)

        assert result.is_ok()
        assert result.value.deleted is True
        mock_client_repo.delete.assert_called_once()
        mock_uow.commit.assert_called_once()

    async def test_client_with_orders(self, mock_uow, mock_client_repo):
        mock_client_repo.count_orders = AsyncMock(return_value=2)

        result = await DeleteClient(mock_uow, mock_client_repo).execute(1)

        assert result.is_err()
        assert result.error.code == "CLIENT_HAS_ORDERS"
        mock_client_repo.delete.assert_not_called()

    async def test_client_not_found(self, mock_uow, mock_client_repo):
        mock_client_repo.get_by_id = AsyncMock(return_value=None)

        result = await DeleteClient(mock_uow, mock_client_repo).execute(5)

        assert result.is_err()
        assert result.error.code == "CLIENT_NOT_FOUND"


@pytest.mark.asyncio
class TestCompanies:
    """Test issuing company management"""

    async def test_set_default_clears_previous(self, mock_uow, mock_company_repo):
        # Act
        result = await SetDefaultCompany(mock_uow, mock_company_repo).execute(2)

        # Assert
        assert result.is_ok()
        assert result.value.is_default is True
        assert result.value.is_active is True
        mock_company_repo.clear_default.assert_called_once_with(except_company_id=2)
        mock_uow.commit.assert_called_once()

    async def test_set_default_unknown_company(self, mock_uow, mock_company_repo):
        mock_company_repo.get_by_id = AsyncMock(return_value=None)

        result = await SetDefaultCompany(mock_uow, mock_company_repo).execute(9)

        assert result.is_err()
        assert result.error.code == "COMPANY_NOT_FOUND"

    async def test_first_company_becomes_default(self, mock_uow, mock_company_repo):
        result = await CreateCompany(mock_uow, mock_company_repo).execute(
            CreateCompanyCommandDTO(name="Billing Co", email="ar@billing.test")
        )

        assert result.is_ok()
        assert result.value.is_default is True
        mock_company_repo.clear_default.assert_called_once_with(except_company_id=3)


@pytest.fixture
def default_company():
    return Company(id=1, name="Billing Co", email="ar@billing.test", is_default=True, is_active=True)


@pytest.mark.asyncio
class TestCompanyLifecycle:
    """Test company lookup, edits and deactivation"""

    async def test_get_company(self, mock_company_repo):
        result = await GetCompany(mock_company_repo).execute(2)

        assert result.is_ok()
        assert result.value.id == 2

    async def test_get_unknown_company(self, mock_company_repo):
        mock_company_repo.get_by_id = AsyncMock(return_value=None)

        result = await GetCompany(mock_company_repo).execute(99)

        assert result.is_err()
        assert result.error.code == "COMPANY_NOT_FOUND"

    async def test_deactivate_clears_default(self, mock_uow, mock_company_repo, default_company):
        mock_company_repo.get_by_id = AsyncMock(return_value=default_company)

        result = await DeactivateCompany(mock_uow, mock_company_repo).execute(1)

        assert result.is_ok()
        assert result.value.is_active is False
        assert result.value.is_default is False
        mock_company_repo.count_open_invoices.assert_called_once_with(1)
        mock_uow.commit.assert_called_once()

    async def test_deactivate_with_open_invoices(self, mock_uow, mock_company_repo, default_company):
        """
        Given: Company with two draft or sent invoices
        When: It is deactivated
        Then: COMPANY_HAS_ACTIVE_INVOICES and the company stays active
        """
        mock_company_repo.get_by_id = AsyncMock(return_value=default_company)
        mock_company_repo.count_open_invoices = AsyncMock(return_value=2)

        result = await DeactivateCompany(mock_uow, mock_company_repo).execute(1)

        assert result.is_err()
        assert result.error.code == "COMPANY_HAS_ACTIVE_INVOICES"
        assert default_company.is_active is True
        mock_company_repo.update.assert_not_called()
        mock_uow.commit.assert_not_called()

    async def test_deactivate_unknown_company(self, mock_uow, mock_company_repo):
        mock_company_repo.get_by_id = AsyncMock(return_value=None)

        result = await DeactivateCompany(mock_uow, mock_company_repo).execute(99)

        assert result.is_err()
        assert result.error.code == "COMPANY_NOT_FOUND"

    async def test_update_fields(self, mock_uow, mock_company_repo, default_company):
        mock_company_repo.get_by_id = AsyncMock(return_value=default_company)

        result = await UpdateCompany(mock_uow, mock_company_repo).execute(
            1, UpdateCompanyCommandDTO(name="  Billing Co Ltd ", city="Lyon")
        )

        assert result.is_ok()
        assert result.value.name == "Billing Co Ltd"
        assert result.value.city == "Lyon"
        assert result.value.is_default is True
        mock_uow.commit.assert_called_once()

    async def test_update_inactive_with_open_invoices(self, mock_uow, mock_company_repo, default_company):
        mock_company_repo.get_by_id = AsyncMock(return_value=default_company)
        mock_company_repo.count_open_invoices = AsyncMock(return_value=1)

        result = await UpdateCompany(mock_uow, mock_company_repo).execute(
            1, UpdateCompanyCommandDTO(is_active=False)
        )

        assert result.is_err()
        assert result.error.code == "COMPANY_HAS_ACTIVE_INVOICES"
        mock_company_repo.update.assert_not_called()

    async def test_update_invalid_email(self, mock_uow, mock_company_repo):
        result = await UpdateCompany(mock_uow, mock_company_repo).execute(
            2, UpdateCompanyCommandDTO(email="not-an-email")
        )

        assert result.is_err()
        assert result.error.code == "VALIDATION_ERROR"

    async def test_update_reactivates(self, mock_uow, mock_company_repo):
        result = await UpdateCompany(mock_uow, mock_company_repo).execute(
            2, UpdateCompanyCommandDTO(is_active=True)
        )

        assert result.is_ok()
        assert result.value.is_active is True
        mock_company_repo.count_open_invoices.assert_not_called()
