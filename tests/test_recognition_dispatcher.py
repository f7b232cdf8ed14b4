from __future__ import annotations

import threading
import unittest

from recognition.contracts import RecognitionError, RecognitionFailure
from recognition.dispatcher import dispatch_recognition


class TestRecognitionDispatcher(unittest.TestCase):
    def test_results_follow_input_order_not_completion_order(self) -> None:
        # Completion order is forced to 8, then 2, then 5.
        done_8 = threading.Event()
        done_2 = threading.Event()
        completed: list[int] = []
        lock = threading.Lock()

        def recognize(doc_id: int) -> str:
            if doc_id == 2:
                self.assertTrue(done_8.wait(timeout=5))
            elif doc_id == 5:
                self.assertTrue(done_2.wait(timeout=5))
            with lock:
                completed.append(doc_id)
            if doc_id == 8:
                done_8.set()
            elif doc_id == 2:
                done_2.set()
            return f"result({doc_id})"

        results = dispatch_recognition([5, 2, 8], recognize=recognize)

        self.assertEqual(completed, [8, 2, 5])
        self.assertEqual(results, ["result(5)", "result(2)", "result(8)"])

    def test_single_failure_aborts_whole_batch(self) -> None:
        called: list[int] = []
        lock = threading.Lock()

        def recognize(doc_id: int) -> str:
            with lock:
                called.append(doc_id)
            if doc_id == 2:
                raise RecognitionFailure(
                    "boom",
                    errors=[RecognitionError(code="RECOGNITION_STDERR", message="stderr", detail=None)],
                )
            return f"result({doc_id})"

        with self.assertRaises(RecognitionFailure) as ctx:
            dispatch_recognition([1, 2, 3], recognize=recognize)

        # Every invocation was issued; no partial list escapes.
        self.assertEqual(sorted(called), [1, 2, 3])
        self.assertEqual([e.code for e in ctx.exception.errors], ["RECOGNITION_STDERR"])

    def test_unexpected_exception_is_reported_as_recognition_failure(self) -> None:
        def recognize(doc_id: int) -> str:
            if doc_id == 4:
                raise OSError("pipe closed")
            return "ok"

        with self.assertRaises(RecognitionFailure) as ctx:
            dispatch_recognition([3, 4], recognize=recognize, max_workers=1)

        self.assertEqual(len(ctx.exception.errors), 1)
        err = ctx.exception.errors[0]
        self.assertEqual(err.code, "RECOGNITION_INVOCATION_ERROR")
        self.assertEqual(err.detail, {"doc_id": 4})

    def test_empty_batch(self) -> None:
        self.assertEqual(dispatch_recognition([], recognize=lambda doc_id: "unused"), [])


if __name__ == "__main__":
    unittest.main()
