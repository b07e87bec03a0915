import sys
import unittest
from pathlib import Path

# Add project root to sys.path
PROJECT_ROOT = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from emg_pointer.acquisition import Sample
from emg_pointer.ai_server import ResponseParseError, build_batch_payload, parse_batch_response
from emg_pointer.feature import BufferingItem, PredictedItem, TopKItem


class TestBuildPayload(unittest.TestCase):

    def test_batch_keeps_order_and_session(self):
        window = [Sample.from_vector([i, 0, 0, 0, 0, 0, 0, -i]) for i in range(3)]
        payload = build_batch_payload(window, "emg_pointer_abc")

        self.assertEqual(payload["session_id"], "emg_pointer_abc")
        self.assertEqual([s["EMG1"] for s in payload["batch"]], [0, 1, 2])
        self.assertEqual([s["EMG8"] for s in payload["batch"]], [0, -1, -2])
        self.assertEqual(sorted(payload["batch"][0]), [f"EMG{i}" for i in range(1, 9)])


class TestParseBatchResponse(unittest.TestCase):

    def setUp(self):
        self.response = {
            "session_id": "s1",
            "total_samples": 3,
            "buffer_ready": True,
            "predictions": [
                {"status": "buffering", "sample_index": 0, "samples_needed": 1, "buffer_size": 19},
                {"status": "predicted", "sample_index": 1, "label": "Fist", "prob": 0.82,
                 "topk": [{"label": "Fist", "prob": 0.82}, {"label": "Rest", "prob": 0.1}]},
                {"status": "predicted", "sample_index": 2, "label": "Rest", "prob": 1},
            ],
            "model_version": "ignored",
        }

    def test_full_response(self):
        result = parse_batch_response(self.response)

        self.assertEqual(result.session_id, "s1")
        self.assertEqual(result.total_samples, 3)
        self.assertTrue(result.buffer_ready)
        self.assertEqual(result.predictions[0], BufferingItem(sample_index=0, samples_needed=1, buffer_size=19))
        self.assertEqual(
            result.predictions[1],
            PredictedItem(sample_index=1, label="Fist", prob=0.82,
                          topk=(TopKItem("Fist", 0.82), TopKItem("Rest", 0.1))),
        )
        self.assertEqual(result.predictions[2].prob, 1.0)
        self.assertEqual(result.predictions[2].topk, ())

    def test_missing_or_null_predictions_is_empty(self):
        self.assertEqual(parse_batch_response({"session_id": "s1"}).predictions, ())
        self.assertEqual(parse_batch_response({"predictions": None}).predictions, ())

    def test_missing_counters_default_to_zero(self):
        result = parse_batch_response({"predictions": [{"status": "buffering"}]})
        self.assertEqual(result.predictions[0], BufferingItem(0, 0, 0))
        self.assertEqual(result.total_samples, 0)

    def test_malformed_shapes(self):
        bad_payloads = [
            [],
            "not json object",
            {"predictions": "nope"},
            {"predictions": [42]},
            {"predictions": [{"status": "thinking"}]},
            {"predictions": [{"status": "predicted", "prob": 0.5}]},
            {"predictions": [{"status": "predicted", "label": "A", "prob": "high"}]},
            {"predictions": [{"status": "predicted", "label": "A", "prob": 0.5, "topk": {}}]},
            {"predictions": [{"status": "buffering", "buffer_size": "x"}]},
            {"session_id": 12, "predictions": []},
            {"buffer_ready": "false", "predictions": []},
            {"buffer_ready": 1, "predictions": []},
        ]
        for payload in bad_payloads:
            with self.subTest(payload=payload):
                with self.assertRaises(ResponseParseError):
                    parse_batch_response(payload)

    def test_parse_error_is_value_error(self):
        self.assertTrue(issubclass(ResponseParseError, ValueError))


if __name__ == '__main__':
    unittest.main()
