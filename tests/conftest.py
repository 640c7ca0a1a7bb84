import os

os.environ.setdefault("SCHEDULER_ENABLED", "false")

from datetime import datetime

import pytest
from aiohttp.test_utils import TestClient, TestServer

from spendwise.main import create_app
from spendwise.store.memory import ExpenseStore, ReportStore

FIXED_NOW = datetime(2025, 3, 10, 15, 30)


@pytest.fixture
def expense_store() -> ExpenseStore:
    return ExpenseStore()


@pytest.fixture
def report_store() -> ReportStore:
    return ReportStore()


@pytest.fixture
async def client(expense_store, report_store):
    app = create_app(expense_store, report_store, clock=lambda: FIXED_NOW)
    async with TestClient(TestServer(app)) as test_client:
        yield test_client
