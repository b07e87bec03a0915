import sys
import threading
import unittest
from pathlib import Path
from unittest.mock import MagicMock

import requests

# Add project root to sys.path
PROJECT_ROOT = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from emg_pointer.acquisition import Sample
from emg_pointer.ai_server import PredictionClient
from emg_pointer.feature import PredictedItem

URL = "http://127.0.0.1:8000/batch_predict_windowed"
LOGGER = "emg_pointer.ai_server.prediction_client"


def make_window(n=10):
    return [Sample.from_vector([i] * 8) for i in range(n)]


def make_response(payload=None, status_error=None, json_error=None):
    response = MagicMock()
    response.text = "<body>"
    if status_error is not None:
        response.raise_for_status.side_effect = status_error
    if json_error is not None:
        response.json.side_effect = json_error
    else:
        response.json.return_value = payload
    return response


class TestPredictionClient(unittest.IsolatedAsyncioTestCase):

    def setUp(self):
        self.http = MagicMock()
        self.handler = MagicMock()
        self.client = PredictionClient(URL, self.handler, timeout=10.0, http=self.http)

    async def test_success_hands_predictions_to_handler(self):
        self.http.post.return_value = make_response({
            "session_id": "s1", "total_samples": 10, "buffer_ready": True,
            "predictions": [{"status": "predicted", "sample_index": 9, "label": "Fist",
                             "prob": 0.9, "topk": [{"label": "Fist", "prob": 0.9}]}],
        })

        window = make_window()
        result = await self.client.submit(window, "s1")

        self.assertIsNotNone(result)
        self.handler.assert_called_once()
        items = self.handler.call_args[0][0]
        self.assertIsInstance(items[0], PredictedItem)
        self.assertEqual(items[0].label, "Fist")

        args, kwargs = self.http.post.call_args
        self.assertEqual(args[0], URL)
        self.assertEqual(kwargs["timeout"], 10.0)
        self.assertEqual(kwargs["json"]["session_id"], "s1")
        self.assertEqual([s["EMG1"] for s in kwargs["json"]["batch"]], list(range(10)))

    async def test_empty_or_absent_predictions_is_noop(self):
        for payload in ({"session_id": "s1", "predictions": []}, {"session_id": "s1"}):
            with self.subTest(payload=payload):
                self.http.post.return_value = make_response(payload)
                result = await self.client.submit(make_window(), "s1")
                self.assertIsNotNone(result)
                self.handler.assert_not_called()
        self.assertEqual(self.client.windows_dropped, 0)

    async def test_transport_failures_drop_window(self):
        failures = [
            requests.ConnectionError("connection refused"),
            requests.Timeout("read timed out"),
        ]
        for exc in failures:
            with self.subTest(exc=exc):
                self.http.post.side_effect = exc
                with self.assertLogs(LOGGER, level="WARNING") as cm:
                    result = await self.client.submit(make_window(), "s1")
                self.assertIsNone(result)
                self.assertIn("prediction error", cm.output[0])
        self.handler.assert_not_called()
        self.assertEqual(self.client.windows_dropped, 2)

    async def test_http_error_status_drops_window(self):
        self.http.post.return_value = make_response(
            {"predictions": []}, status_error=requests.HTTPError("500 Server Error"))

        with self.assertLogs(LOGGER, level="WARNING"):
            result = await self.client.submit(make_window(), "s1")

        self.assertIsNone(result)
        self.handler.assert_not_called()

    async def test_invalid_json_drops_window(self):
        self.http.post.return_value = make_response(json_error=ValueError("Expecting value"))

        with self.assertLogs(LOGGER, level="WARNING") as cm:
            result = await self.client.submit(make_window(), "s1")

        self.assertIsNone(result)
        self.assertIn("Failed to parse", cm.output[0])
        self.handler.assert_not_called()

    async def test_unexpected_shape_drops_window(self):
        self.http.post.return_value = make_response({"predictions": [{"status": "thinking"}]})

        with self.assertLogs(LOGGER, level="WARNING"):
            result = await self.client.submit(make_window(), "s1")

        self.assertIsNone(result)
        self.handler.assert_not_called()

    async def test_handler_error_does_not_escape(self):
        self.http.post.return_value = make_response({
            "predictions": [{"status": "predicted", "label": "A", "prob": 0.5}],
        })
        self.handler.side_effect = RuntimeError("boom")

        with self.assertLogs(LOGGER, level="ERROR"):
            result = await self.client.submit(make_window(), "s1")

        self.assertIsNotNone(result)

    async def test_stalled_server_is_bounded_by_timeout(self):
        gate = threading.Event()
        self.addCleanup(gate.set)

        def stalled_post(*args, **kwargs):
            # Keeps trickling bytes in real life, so no socket timeout fires
            gate.wait(5)
            return make_response({"predictions": []})

        self.http.post.side_effect = stalled_post
        client = PredictionClient(URL, self.handler, timeout=0.1, http=self.http)

        with self.assertLogs(LOGGER, level="WARNING") as cm:
            result = await client.submit(make_window(), "s1")

        self.assertIsNone(result)
        self.assertIn("no response within", cm.output[0])
        self.handler.assert_not_called()
        self.assertEqual(client.windows_dropped, 1)
        self.assertEqual(client.windows_sent, 1)

    async def test_close_closes_session(self):
        self.client.close()
        self.http.close.assert_called_once()


if __name__ == '__main__':
    unittest.main()
