import json
import unittest
from unittest.mock import Mock, patch

from docsrouter.controller import StorageController, location_prefix
from docsrouter.controller.storage_controller import _object_dict_to_remote_object
from docsrouter.errors import (
    NotFoundError,
    PermissionError,
    QuotaExceededError,
    RateLimitError,
)


def _http_error(status: int, reason: str, body: dict | None = None):
    from googleapiclient.errors import HttpError

    resp = Mock()
    resp.status = status
    resp.reason = reason
    content = json.dumps(body).encode("utf-8") if body is not None else b"{}"
    return HttpError(resp=resp, content=content)


class TestStorageControllerHelpers(unittest.TestCase):
    def test_location_prefix(self) -> None:
        self.assertEqual(location_prefix("documentation"), "documentation/")
        self.assertEqual(location_prefix("documentation/stable/1.0/"), "documentation/stable/1.0/")
        self.assertEqual(location_prefix(""), "")

    def test_object_dict_to_remote_object(self) -> None:
        data = {
            "name": "documentation/dev/api/index.html",
            "size": "123",
            "md5Hash": "abc==",
            "contentType": "text/html",
        }
        obj = _object_dict_to_remote_object(data, "documentation/dev/")
        self.assertIsNotNone(obj)
        self.assertEqual(obj.key, "api/index.html")
        self.assertEqual(obj.size, 123)
        self.assertEqual(obj.md5, "abc==")

    def test_directory_placeholders_skipped(self) -> None:
        self.assertIsNone(
            _object_dict_to_remote_object({"name": "documentation/dev/"}, "documentation/dev/")
        )
        self.assertIsNone(
            _object_dict_to_remote_object({"name": "documentation/dev/a/"}, "documentation/dev/")
        )


class TestStorageControllerMocked(unittest.TestCase):
    def _service(self):
        service = Mock()
        objects_resource = Mock()
        service.objects.return_value = objects_resource
        return service, objects_resource

    def test_list_objects_paginates_and_strips_location(self) -> None:
        service, objects_resource = self._service()
        page1 = Mock()
        page1.execute.return_value = {
            "items": [{"name": "documentation/dev/a.html", "md5Hash": "x", "size": "1"}],
            "nextPageToken": "T2",
        }
        page2 = Mock()
        page2.execute.return_value = {
            "items": [{"name": "documentation/dev/b/c.html", "md5Hash": "y", "size": "2"}],
        }
        objects_resource.list.side_effect = [page1, page2]

        controller = StorageController.from_service(service, "bucket")
        objs = controller.list_objects("documentation/dev")

        self.assertEqual([o.key for o in objs], ["a.html", "b/c.html"])
        first, second = objects_resource.list.call_args_list
        self.assertEqual(first.kwargs["prefix"], "documentation/dev/")
        self.assertEqual(first.kwargs["bucket"], "bucket")
        self.assertIsNone(first.kwargs["pageToken"])
        self.assertEqual(second.kwargs["pageToken"], "T2")

    def test_upload_builds_object_name(self) -> None:
        service, objects_resource = self._service()
        req = Mock()
        req.execute.return_value = {"name": "documentation/index.html"}
        objects_resource.insert.return_value = req

        controller = StorageController.from_service(service, "bucket")
        with patch("googleapiclient.http.MediaFileUpload") as media:
            controller.upload(
                "/art/index.html", "documentation", "index.html", content_type="text/html"
            )

        media.assert_called_once_with("/art/index.html", mimetype="text/html", resumable=False)
        kwargs = objects_resource.insert.call_args.kwargs
        self.assertEqual(kwargs["name"], "documentation/index.html")
        self.assertEqual(kwargs["bucket"], "bucket")

    def test_delete_builds_object_name(self) -> None:
        service, objects_resource = self._service()
        req = Mock()
        req.execute.return_value = None
        objects_resource.delete.return_value = req

        controller = StorageController.from_service(service, "bucket")
        controller.delete("documentation/stable/1.0", "old.html")

        objects_resource.delete.assert_called_once_with(
            bucket="bucket", object="documentation/stable/1.0/old.html"
        )

    def test_maps_http_404_to_not_found(self) -> None:
        service, objects_resource = self._service()
        req = Mock()
        req.execute.side_effect = _http_error(404, "Not Found")
        objects_resource.delete.return_value = req

        controller = StorageController.from_service(service, "bucket")
        with self.assertRaises(NotFoundError):
            controller.delete("documentation", "x.html")

    def test_maps_http_403_to_permission(self) -> None:
        service, objects_resource = self._service()
        req = Mock()
        req.execute.side_effect = _http_error(403, "Forbidden")
        objects_resource.list.return_value = req

        controller = StorageController.from_service(service, "bucket")
        with self.assertRaises(PermissionError):
            controller.list_objects("documentation")

    def test_retry_on_429(self) -> None:
        service, objects_resource = self._service()
        req = Mock()
        objects_resource.list.return_value = req

        body = {"error": {"message": "rate limited", "errors": [{"reason": "rateLimitExceeded"}]}}
        err = _http_error(429, "rateLimitExceeded", body)
        req.execute.side_effect = [err, err, {"items": []}]

        controller = StorageController.from_service(service, "bucket")
        with patch("time.sleep", return_value=None):
            objs = controller.list_objects("documentation")

        self.assertEqual(objs, [])
        self.assertEqual(req.execute.call_count, 3)

    def test_retry_on_403_rate_limit_reason(self) -> None:
        service, objects_resource = self._service()
        req = Mock()
        objects_resource.insert.return_value = req

        body = {
            "error": {
                "message": "The object exceeded the rate limit for object mutation operations",
                "errors": [{"domain": "usageLimits", "reason": "rateLimitExceeded"}],
            }
        }
        req.execute.side_effect = [_http_error(403, "Forbidden", body), {"name": "x"}]

        controller = StorageController.from_service(service, "bucket")
        with patch("googleapiclient.http.MediaFileUpload"), patch("time.sleep", return_value=None):
            controller.upload(
                "/art/index.html", "documentation", "index.html", content_type="text/html"
            )

        self.assertEqual(req.execute.call_count, 2)

    def test_403_quota_is_not_retried(self) -> None:
        service, objects_resource = self._service()
        req = Mock()
        objects_resource.list.return_value = req
        body = {"error": {"errors": [{"domain": "usageLimits", "reason": "quotaExceeded"}]}}
        req.execute.side_effect = _http_error(403, "Forbidden", body)

        controller = StorageController.from_service(service, "bucket")
        with patch("time.sleep", return_value=None):
            with self.assertRaises(QuotaExceededError):
                controller.list_objects("documentation")
        self.assertEqual(req.execute.call_count, 1)

    def test_retry_exhausted_raises_rate_limit(self) -> None:
        service, objects_resource = self._service()
        req = Mock()
        objects_resource.list.return_value = req
        req.execute.side_effect = _http_error(429, "rateLimitExceeded")

        controller = StorageController.from_service(service, "bucket")
        with patch("time.sleep", return_value=None):
            with self.assertRaises(RateLimitError):
                controller.list_objects("documentation")
        self.assertEqual(req.execute.call_count, 4)


if __name__ == "__main__":
    unittest.main()
