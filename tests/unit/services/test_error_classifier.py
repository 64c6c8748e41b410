from sqlalchemy.exc import IntegrityError, NoResultFound, OperationalError

from src.app.services.error_classifier import classify
from src.app.services.token_codec import TokenError
from src.domain.errors import ApiError, ApiErrorException, ApiErrorKind
from src.domain.validation import LoginDataError


def test_storage_errors_are_db_error():
    for exc in (
        OperationalError("SELECT", {}, Exception("down")),
        IntegrityError("INSERT", {}, Exception("duplicate")),
        NoResultFound("No row was found"),
    ):
        assert classify(exc) == ApiError.db_error()


def test_token_errors_are_unauthorized():
    assert classify(TokenError("bad tag")).kind == ApiErrorKind.Unauthorized


def test_login_data_errors_are_bad_request():
    assert classify(LoginDataError("Password too short")).kind == ApiErrorKind.BadRequest


def test_api_error_exception_keeps_its_kind():
    assert classify(ApiErrorException(ApiError.expired())) == ApiError.expired()


def test_unknown_errors_are_unexpected_with_detail():
    error = classify(KeyError("secret internals"))
    assert error.kind == ApiErrorKind.Unexpected
    assert "secret internals" in error.detail


def test_client_strings_hide_details():
    db = classify(OperationalError("SELECT * FROM session", {}, Exception("pw=hunter2")))
    unexpected = classify(RuntimeError("pw=hunter2"))
    assert db.message == "DB Error"
    assert unexpected.message == "Unexpected Error"
    assert "hunter2" not in db.message + unexpected.message


def test_messages():
    assert ApiError.bad_request().message == "Bad Request"
    assert ApiError.not_found().message == "Not found requested API endpoint"
    assert ApiError.unauthorized().message == "Unauthorized"
    assert ApiError.expired().message == "Expired"
