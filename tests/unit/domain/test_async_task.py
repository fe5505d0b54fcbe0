"""Tests for the asynchronous task model."""
import pytest

from tcprovider.domain.task import MYSQL_PENDING_STATUSES, MYSQL_SUCCESS_STATUSES, AsyncTask


@pytest.mark.unit
class TestAsyncTask:
    """Test AsyncTask status classification."""

    def test_observe_returns_updated_copy(self):
        task = AsyncTask(task_id="req-1")
        observed = task.observe("RUNNING", None)

        assert task.status is None
        assert observed.status == "RUNNING"
        assert observed.task_id == "req-1"

    @pytest.mark.parametrize("status", ["INITIAL", "RUNNING"])
    def test_mysql_pending_statuses(self, status):
        task = AsyncTask(task_id="req-1").observe(status)
        assert task.is_pending(MYSQL_PENDING_STATUSES)
        assert not task.is_success(MYSQL_SUCCESS_STATUSES)

    def test_mysql_success_status(self):
        task = AsyncTask(task_id="req-1").observe("SUCCESS")
        assert task.is_success(MYSQL_SUCCESS_STATUSES)

    @pytest.mark.parametrize("status", ["FAILED", "KILLED", "SOMETHING_NEW"])
    def test_other_statuses_are_terminal_failures(self, status):
        task = AsyncTask(task_id="req-1").observe(status, "boom")
        assert not task.is_pending(MYSQL_PENDING_STATUSES)
        assert not task.is_success(MYSQL_SUCCESS_STATUSES)
        assert task.message == "boom"
