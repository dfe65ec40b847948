import pytest

from stockroom import report_record_repository as repo
from stockroom.report_record_repository import ReportRecord
from stockroom.report_record_service import InternalError, NotFoundError, ReportRecordService

REPORT = ReportRecord(product_id=1, description="Samsung S21 FE", records_count=4)


class FakeReportRepository:
    def __init__(self, records=None, get_error=None, get_all_error=None):
        self.records = records
        self.get_error = get_error
        self.get_all_error = get_all_error
        self.called_get = False
        self.called_get_all = False

    def get_all(self):
        self.called_get_all = True
        if self.get_all_error is not None:
            raise self.get_all_error
        return self.records

    def get(self, product_id):
        self.called_get = True
        if self.get_error is not None:
            raise self.get_error
        for record in self.records or []:
            if record.product_id == product_id:
                return record
        raise repo.NotFoundError()


def test_get_ok():
    repository = FakeReportRepository(records=[REPORT])
    assert ReportRecordService(repository).get(1) == [REPORT]
    assert repository.called_get is True


def test_get_fail_not_found():
    repository = FakeReportRepository(get_error=repo.NotFoundError())
    with pytest.raises(NotFoundError) as excinfo:
        ReportRecordService(repository).get(1)
    assert str(excinfo.value) == "product record not found"
    assert repository.called_get is True


def test_get_fail_internal():
    repository = FakeReportRepository(get_error=repo.InternalError())
    with pytest.raises(InternalError) as excinfo:
        ReportRecordService(repository).get(1)
    assert str(excinfo.value) == "database internal error"


def test_get_all_ok():
    repository = FakeReportRepository(records=[REPORT])
    assert ReportRecordService(repository).get(None) == [REPORT]
    assert repository.called_get_all is True
    assert repository.called_get is False


def test_get_all_ok_empty():
    repository = FakeReportRepository(records=None)
    assert ReportRecordService(repository).get() == []
    assert repository.called_get_all is True


def test_get_all_fail():
    repository = FakeReportRepository(get_all_error=RuntimeError("forced query error"))
    with pytest.raises(InternalError) as excinfo:
        ReportRecordService(repository).get(None)
    assert str(excinfo.value) == "database internal error"
    assert repository.called_get_all is True