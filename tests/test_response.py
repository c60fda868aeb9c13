import unittest

import httpx

from plainhttp import HttpRequest, HttpResponse


def make_response(status_code: int, body="", headers=None) -> HttpResponse:
    return HttpResponse(HttpRequest("https://example.com"), httpx.Response(status_code, headers=headers), body)


class TestSucceeded(unittest.TestCase):
    def test_success_range(self):
        for status_code in (200, 201, 204, 299):
            self.assertTrue(make_response(status_code).succeeded, status_code)

    def test_outside_success_range(self):
        for status_code in (100, 199, 300, 304, 404, 500):
            self.assertFalse(make_response(status_code).succeeded, status_code)


class TestHeaders(unittest.TestCase):
    def test_get_single_header_returns_first_value(self):
        response = make_response(200, headers=[("Set-Cookie", "a=1"), ("Set-Cookie", "b=2")])
        self.assertEqual(response.get_single_header("set-cookie"), "a=1")

    def test_get_single_header_missing(self):
        self.assertIsNone(make_response(200).get_single_header("X-Missing"))


class TestBody(unittest.TestCase):
    def test_json(self):
        self.assertEqual(make_response(200, '{"data": [1, 2]}').json(), {"data": [1, 2]})

    def test_json_without_body_raises(self):
        with self.assertRaises(ValueError):
            make_response(200, None).json()

    def test_request_is_kept(self):
        response = make_response(200)
        self.assertEqual(str(response.request), "GET https://example.com")


if __name__ == "__main__":
    unittest.main()
