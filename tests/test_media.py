import asyncio
import hashlib
import unittest
from unittest.mock import patch

import requests

import media
import store
from common import PROJECT, fake_upload, http_response, login, new_client, reset_database, session


class TestResourceType(unittest.TestCase):

    def test_content_types(self):
        self.assertEqual(media.resource_type_for("image/png"), "image")
        self.assertEqual(media.resource_type_for("video/mp4"), "video")
        self.assertEqual(media.resource_type_for("application/pdf"), "raw")
        self.assertEqual(media.resource_type_for(None), "raw")


@patch("media.requests.post")
class TestUploadFile(unittest.TestCase):

    def test_posts_preset_and_folder(self, mock_post):
        mock_post.return_value = http_response(200, {"secure_url": "https://cdn.test/a.jpg", "public_id": "p/a"})

        result = media.upload_file("a.jpg", "image/jpeg", b"data")

        self.assertEqual(result, {"url": "https://cdn.test/a.jpg", "public_id": "p/a", "resource_type": "image"})
        args, kwargs = mock_post.call_args
        self.assertEqual(args[0], "https://api.cloudinary.com/v1_1/test-cloud/image/upload")
        self.assertEqual(kwargs["data"]["upload_preset"], "portfolio_uploads")
        self.assertEqual(kwargs["data"]["folder"], "portfolio_uploads")

    def test_http_error(self, mock_post):
        mock_post.return_value = http_response(400, {"error": {"message": "bad preset"}})
        with self.assertRaises(media.MediaError):
            media.upload_file("a.jpg", "image/jpeg", b"data")

    def test_network_error(self, mock_post):
        mock_post.side_effect = requests.Timeout("slow")
        with self.assertRaises(media.MediaError):
            media.upload_file("a.jpg", "image/jpeg", b"data")


class TestUploadFiles(unittest.TestCase):

    def test_results_in_submission_order_callbacks_in_completion_order(self):
        delays = {"slow.jpg": 0.3, "mid.jpg": 0.15, "fast.jpg": 0}
        items = [(name, "image/jpeg", b"x") for name in ("slow.jpg", "mid.jpg", "fast.jpg")]
        seen = []

        with patch("media.upload_file", side_effect=fake_upload(delays)):
            results = asyncio.run(media.upload_files(items, on_uploaded=lambda r: seen.append(r["filename"])))

        self.assertEqual([r["filename"] for r in results], ["slow.jpg", "mid.jpg", "fast.jpg"])
        self.assertEqual([r["index"] for r in results], [0, 1, 2])
        self.assertEqual(seen, ["fast.jpg", "mid.jpg", "slow.jpg"])

    def test_one_failure_does_not_abort_siblings(self):
        items = [(name, "image/jpeg", b"x") for name in ("a.jpg", "broken.jpg", "c.jpg")]
        seen = []

        with patch("media.upload_file", side_effect=fake_upload({}, failing={"broken.jpg"})):
            results = asyncio.run(media.upload_files(items, on_uploaded=lambda r: seen.append(r["filename"])))

        self.assertIn("error", results[1])
        self.assertEqual(results[0]["url"], "https://cdn.test/a.jpg")
        self.assertEqual(results[2]["url"], "https://cdn.test/c.jpg")
        self.assertEqual(sorted(seen), ["a.jpg", "c.jpg"])


class TestMediaAPI(unittest.TestCase):

    def setUp(self):
        reset_database()
        self.client = new_client()
        login(self.client)
        self.project = self.client.post("/api/projects", json=dict(PROJECT, gallery_urls=["https://cdn.test/old.jpg"])).json()["data"]

    def files(self, *names):
        return [("files", (name, b"bytes", "image/jpeg")) for name in names]

    def test_concurrent_uploads_extend_gallery_once_each(self):
        delays = {"one.jpg": 0.2, "two.jpg": 0, "three.jpg": 0.1}
        with patch("media.upload_file", side_effect=fake_upload(delays)):
            response = self.client.post("/api/media/upload", files=self.files("one.jpg", "two.jpg", "three.jpg"),
                                        data={"project_id": self.project["id"]})

        self.assertEqual(response.status_code, 200)
        body = response.json()
        self.assertIsNone(body["error"])
        gallery = body["data"]["project"]["gallery_urls"]
        self.assertEqual(len(gallery), 4)
        self.assertEqual(gallery[0], "https://cdn.test/old.jpg")
        self.assertEqual(sorted(gallery[1:]), sorted(f"https://cdn.test/{n}" for n in ("one.jpg", "two.jpg", "three.jpg")))

        stored = self.client.get("/api/projects").json()["data"][0]["gallery_urls"]
        self.assertEqual(stored, gallery)

    def test_failed_file_is_reported(self):
        with patch("media.upload_file", side_effect=fake_upload({}, failing={"bad.jpg"})):
            response = self.client.post("/api/media/upload", files=self.files("good.jpg", "bad.jpg"),
                                        data={"project_id": self.project["id"]})

        body = response.json()
        self.assertEqual(body["error"], "Failed to upload bad.jpg")
        self.assertEqual(len(body["data"]["project"]["gallery_urls"]), 2)

    def test_unknown_project(self):
        with patch("media.upload_file", side_effect=fake_upload({})) as mock_upload:
            response = self.client.post("/api/media/upload", files=self.files("a.jpg"), data={"project_id": "missing"})
        self.assertEqual(response.status_code, 404)
        mock_upload.assert_not_called()

    def test_project_deleted_while_uploading(self):
        upload = fake_upload({})

        def upload_then_delete_project(filename, content_type, content):
            db = session()
            try:
                store.projects.delete(db, self.project["id"])
            finally:
                db.close()
            return upload(filename, content_type, content)

        with patch("media.upload_file", side_effect=upload_then_delete_project):
            response = self.client.post("/api/media/upload", files=self.files("a.jpg"),
                                        data={"project_id": self.project["id"]})

        self.assertEqual(response.status_code, 404)
        self.assertEqual(response.json(), {"data": None, "error": "Project not found"})

    def test_upload_needs_login(self):
        response = new_client().post("/api/media/upload", files=self.files("a.jpg"))
        self.assertEqual(response.status_code, 401)


class TestSign(unittest.TestCase):

    def test_sorted_params_then_secret(self):
        expected = hashlib.sha1(b"public_id=folder/pic&timestamp=1700000000shh").hexdigest()
        self.assertEqual(media.sign({"timestamp": 1700000000, "public_id": "folder/pic"}, "shh"), expected)


@patch("media.requests.post")
class TestDeleteFile(unittest.TestCase):

    def test_ok(self, mock_post):
        mock_post.return_value = http_response(200, {"result": "ok"})

        self.assertTrue(media.delete_file("portfolio_uploads/pic"))

        args, kwargs = mock_post.call_args
        self.assertEqual(args[0], "https://api.cloudinary.com/v1_1/test-cloud/image/destroy")
        data = kwargs["data"]
        self.assertEqual(data["api_key"], "test-api-key")
        self.assertEqual(data["signature"], media.sign(
            {"public_id": "portfolio_uploads/pic", "timestamp": data["timestamp"]}, "test-api-secret"))

    def test_not_found(self, mock_post):
        mock_post.return_value = http_response(200, {"result": "not found"})
        self.assertFalse(media.delete_file("portfolio_uploads/gone"))

    def test_missing_public_id(self, mock_post):
        with self.assertRaises(media.MediaError):
            media.delete_file("")
        mock_post.assert_not_called()

    def test_missing_credentials(self, mock_post):
        with patch("media.CLOUDINARY_API_SECRET", ""):
            with self.assertRaises(media.MediaError):
                media.delete_file("portfolio_uploads/pic")
        mock_post.assert_not_called()

    def test_network_error(self, mock_post):
        mock_post.side_effect = requests.ConnectionError("offline")
        with self.assertRaises(media.MediaError):
            media.delete_file("portfolio_uploads/pic")

    def test_response_that_is_not_json(self, mock_post):
        response = http_response(502)
        response.json.side_effect = ValueError("not json")
        mock_post.return_value = response
        with self.assertRaises(media.MediaError):
            media.delete_file("portfolio_uploads/pic")

    def test_api_route_reports_network_error(self, mock_post):
        reset_database()
        client = new_client()
        login(client)
        mock_post.side_effect = requests.ConnectionError("offline")

        response = client.delete("/api/media/delete?public_id=portfolio_uploads/pic")

        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json(), {"error": "Failed to delete portfolio_uploads/pic"})

    def test_api_route(self, mock_post):
        reset_database()
        client = new_client()
        login(client)

        mock_post.return_value = http_response(200, {"result": "ok"})
        self.assertEqual(client.delete("/api/media/delete?public_id=portfolio_uploads/pic").json(), {"success": True})

        mock_post.return_value = http_response(200, {"result": "not found"})
        response = client.delete("/api/media/delete?public_id=portfolio_uploads/pic")
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json(), {"error": "Failed to delete image"})

        response = client.delete("/api/media/delete")
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json(), {"error": "Missing required parameters"})


if __name__ == "__main__":
    unittest.main()
