import unittest

from docsrouter.errors.exceptions import (
    ApiError,
    AuthError,
    ClassificationError,
    ConflictError,
    DocsRouterError,
    HttpErrorInfo,
    InvalidArgumentError,
    NetworkError,
    NotFoundError,
    PermissionError,
    QuotaExceededError,
    RateLimitError,
    SyncError,
    map_http_error,
)


class TestExceptions(unittest.TestCase):
    def test_base_error_keeps_details_and_cause(self) -> None:
        cause = RuntimeError("root")
        err = DocsRouterError("msg", details={"k": "v"}, cause=cause)
        self.assertEqual(str(err), "msg")
        self.assertEqual(err.details["k"], "v")
        self.assertIs(err.cause, cause)

    def test_domain_errors_share_base(self) -> None:
        self.assertIsInstance(ClassificationError("x"), DocsRouterError)
        self.assertIsInstance(SyncError("x"), DocsRouterError)
        self.assertEqual(ClassificationError("x").details, {})

    def test_map_http_error_basic(self) -> None:
        err = map_http_error(HttpErrorInfo(status_code=404, message="not found"))
        self.assertIsInstance(err, NotFoundError)

        err = map_http_error(HttpErrorInfo(status_code=400, message="bad req"))
        self.assertIsInstance(err, InvalidArgumentError)

        err = map_http_error(HttpErrorInfo(status_code=429, message="rate"))
        self.assertIsInstance(err, RateLimitError)

        err = map_http_error(HttpErrorInfo(status_code=412, message="precondition"))
        self.assertIsInstance(err, ConflictError)

        err = map_http_error(HttpErrorInfo(status_code=401, message="auth"))
        self.assertIsInstance(err, AuthError)

    def test_map_http_error_403_quota_vs_permission(self) -> None:
        err = map_http_error(
            HttpErrorInfo(status_code=403, reason="quotaExceeded", message="quota")
        )
        self.assertIsInstance(err, QuotaExceededError)

        err = map_http_error(HttpErrorInfo(status_code=403, reason="forbidden", message="x"))
        self.assertIsInstance(err, PermissionError)

    def test_map_http_error_403_throttling_is_rate_limit(self) -> None:
        for reason in ("rateLimitExceeded", "userRateLimitExceeded"):
            err = map_http_error(HttpErrorInfo(status_code=403, reason=reason))
            self.assertIsInstance(err, RateLimitError, reason)

    def test_map_http_error_403_usage_limits_domain_is_quota(self) -> None:
        err = map_http_error(
            HttpErrorInfo(status_code=403, reason="Forbidden", details={"domain": "usageLimits"})
        )
        self.assertIsInstance(err, QuotaExceededError)
        self.assertEqual(err.details["domain"], "usageLimits")

    def test_map_http_error_408_is_network(self) -> None:
        self.assertIsInstance(map_http_error(HttpErrorInfo(status_code=408)), NetworkError)

    def test_map_http_error_5xx_keeps_status(self) -> None:
        err = map_http_error(HttpErrorInfo(status_code=503, message="unavail"))
        self.assertIsInstance(err, ApiError)
        self.assertEqual(err.details["status_code"], 503)

    def test_map_http_error_default_message(self) -> None:
        err = map_http_error(HttpErrorInfo(status_code=418))
        self.assertIsInstance(err, ApiError)
        self.assertEqual(str(err), "HTTP error 418")


if __name__ == "__main__":
    unittest.main()
