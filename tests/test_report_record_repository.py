import pytest

from stockroom.report_record_repository import (
    GET_ALL_REPORT_RECORDS,
    GET_REPORT_RECORD,
    InternalError,
    NotFoundError,
    ReportRecord,
    ReportRecordRepository,
)

REPORT = ReportRecord(product_id=1, description="Samsung S21 FE", records_count=4)
REPORT_ROW = (1, "Samsung S21 FE", 4)


class FakeCursor:
    def __init__(self, connection):
        self.connection = connection

    def execute(self, query, params=()):
        self.connection.executed.append((query, tuple(params)))
        if self.connection.execute_error is not None:
            raise self.connection.execute_error

    def fetchone(self):
        return self.connection.rows[0] if self.connection.rows else None

    def fetchall(self):
        return list(self.connection.rows)

    def close(self):
        self.connection.closed += 1


class FakeConnection:
    def __init__(self, rows=(), execute_error=None):
        self.rows = list(rows)
        self.execute_error = execute_error
        self.executed = []
        self.closed = 0

    def cursor(self):
        return FakeCursor(self)


def test_get_all_ok():
    db = FakeConnection(rows=[REPORT_ROW])
    assert ReportRecordRepository(db).get_all() == [REPORT]
    assert db.executed == [(GET_ALL_REPORT_RECORDS, ())]
    assert db.closed == 1


def test_get_all_ok_empty():
    assert ReportRecordRepository(FakeConnection()).get_all() == []


def test_get_all_fail_raises_database_error():
    error = RuntimeError("forced error on query")
    db = FakeConnection(execute_error=error)
    with pytest.raises(RuntimeError) as excinfo:
        ReportRecordRepository(db).get_all()
    assert excinfo.value is error
    assert str(excinfo.value) == "forced error on query"


def test_get_ok():
    db = FakeConnection(rows=[REPORT_ROW])
    assert ReportRecordRepository(db).get(1) == REPORT
    assert db.executed == [(GET_REPORT_RECORD, (1,))]


def test_get_fail_not_found():
    with pytest.raises(NotFoundError) as excinfo:
        ReportRecordRepository(FakeConnection()).get(1)
    assert str(excinfo.value) == "product not found in database"


def test_get_fail_internal_error():
    db = FakeConnection(execute_error=ConnectionError("connection closed"))
    with pytest.raises(InternalError) as excinfo:
        ReportRecordRepository(db).get(1)
    assert str(excinfo.value) == "database internal error"