from __future__ import annotations

import subprocess
import tempfile
import unittest
from pathlib import Path
from unittest.mock import patch

from recognition.contracts import RecognitionConfig, RecognitionFailure
from recognition.engines.seshat_cli import SeshatCliEngine
from recognition.module import make_engine_recognizer

_RUN = "recognition.engines.seshat_cli.subprocess.run"


class TestSeshatCliEngine(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.root = Path(self._tmp.name)
        (self.root / "temp").mkdir()
        (self.root / "temp" / "temp7.inkml").write_text("<ink/>", encoding="utf-8")
        self.config = RecognitionConfig(seshat_root=self.root, timeout_s=5.0)
        self.engine = SeshatCliEngine()

    def tearDown(self) -> None:
        self._tmp.cleanup()

    def _completed(self, *, returncode: int = 0, stdout: str = "", stderr: str = ""):
        return subprocess.CompletedProcess(args=[], returncode=returncode, stdout=stdout, stderr=stderr)

    def test_command_uses_per_document_paths(self) -> None:
        cmd = self.engine.build_command(config=self.config, doc_id=7)
        self.assertEqual(
            cmd,
            [
                "./seshat",
                "-c",
                "Config/CONFIG",
                "-i",
                "temp/temp7.inkml",
                "-o",
                "out/out7.inkml",
                "-r",
                "render7.pgm",
                "-d",
                "out7.dot",
            ],
        )

    def test_success_returns_raw_stdout(self) -> None:
        stdout = "Reading...\nLaTeX: x+1\n"
        with patch(_RUN, return_value=self._completed(stdout=stdout)) as run:
            result = self.engine.run_on_document(config=self.config, doc_id=7)

        self.assertTrue(result.ok)
        self.assertEqual(result.stdout, stdout)
        self.assertEqual(result.errors, [])
        self.assertEqual(run.call_args.kwargs["cwd"], self.root)
        self.assertEqual(run.call_args.kwargs["timeout"], 5.0)
        self.assertTrue((self.root / "out").is_dir())

    def test_any_stderr_is_a_failure(self) -> None:
        with patch(_RUN, return_value=self._completed(stdout="LaTeX: x", stderr="warning: odd stroke")):
            result = self.engine.run_on_document(config=self.config, doc_id=7)

        self.assertFalse(result.ok)
        self.assertEqual([e.code for e in result.errors], ["RECOGNITION_STDERR"])

    def test_non_zero_exit(self) -> None:
        with patch(_RUN, return_value=self._completed(returncode=1, stderr="segfault")):
            result = self.engine.run_on_document(config=self.config, doc_id=7)

        self.assertFalse(result.ok)
        self.assertEqual(result.errors[0].code, "RECOGNITION_BACKEND_ERROR")
        self.assertEqual(result.errors[0].detail["returncode"], 1)

    def test_missing_binary(self) -> None:
        with patch(_RUN, side_effect=FileNotFoundError()):
            result = self.engine.run_on_document(config=self.config, doc_id=7)

        self.assertEqual([e.code for e in result.errors], ["RECOGNITION_BACKEND_NOT_INSTALLED"])

    def test_timeout(self) -> None:
        with patch(_RUN, side_effect=subprocess.TimeoutExpired(cmd="seshat", timeout=5.0)):
            result = self.engine.run_on_document(config=self.config, doc_id=7)

        self.assertEqual([e.code for e in result.errors], ["RECOGNITION_TIMEOUT"])

    def test_missing_input_does_not_run_backend(self) -> None:
        with patch(_RUN) as run:
            result = self.engine.run_on_document(config=self.config, doc_id=99)

        run.assert_not_called()
        self.assertEqual([e.code for e in result.errors], ["RECOGNITION_INPUT_NOT_FOUND"])

    def test_engine_recognizer_raises_on_failure(self) -> None:
        recognize = make_engine_recognizer(self.config)
        with patch(_RUN, return_value=self._completed(stderr="bad")):
            with self.assertRaises(RecognitionFailure) as ctx:
                recognize(7)
        self.assertEqual([e.code for e in ctx.exception.errors], ["RECOGNITION_STDERR"])

        with patch(_RUN, return_value=self._completed(stdout="LaTeX: y")):
            self.assertEqual(recognize(7), "LaTeX: y")


class TestRecognitionConfig(unittest.TestCase):
    def test_rejects_non_path_root(self) -> None:
        with self.assertRaises(TypeError):
            RecognitionConfig(seshat_root="/opt/seshat")  # type: ignore[arg-type]

    def test_rejects_bad_limits(self) -> None:
        with self.assertRaises(ValueError):
            RecognitionConfig(seshat_root=Path("."), timeout_s=0)
        with self.assertRaises(ValueError):
            RecognitionConfig(seshat_root=Path("."), max_workers=0)


if __name__ == "__main__":
    unittest.main()
