from stockroom.database import MySQLError, mysql_error_number


def test_mysql_error_keeps_number_and_message():
    error = MySQLError(1452, "fk fails")
    assert error.number == 1452
    assert error.message == "fk fails"


def test_mysql_error_string_form():
    assert str(MySQLError(1452, "fk fails")) == "Error 1452: fk fails"


def test_number_of_mysql_error():
    assert mysql_error_number(MySQLError(1062, "dup")) == 1062


def test_default_mysql_error_has_zero_number():
    assert mysql_error_number(MySQLError()) == 0


def test_plain_exception_has_no_number():
    assert mysql_error_number(ValueError("forced non mysql error")) is None


def test_number_taken_from_first_argument():
    assert mysql_error_number(Exception(1406, "too long")) == 1406


def test_number_taken_from_errno_attribute():
    class DriverError(Exception):
        def __init__(self, errno):
            super().__init__("driver failure")
            self.errno = errno

    assert mysql_error_number(DriverError(1292)) == 1292


def test_boolean_and_text_arguments_are_not_numbers():
    assert mysql_error_number(Exception(True)) is None
    assert mysql_error_number(Exception("1062")) is None


def test_os_errors_are_not_mysql_errors():
    assert mysql_error_number(OSError(2, "missing")) is None