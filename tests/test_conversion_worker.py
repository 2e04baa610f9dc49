import os
import shutil
import tempfile
import unittest

from core.config.converter_config import ConverterConfig
from core.converter import FileConverter


def _romanize(text, language_pair):
    return text.replace("東京", "tokyo")


class TestConversionWorker(unittest.TestCase):
    def setUp(self):
        self.test_dir = tempfile.mkdtemp()
        self.addCleanup(shutil.rmtree, self.test_dir)

    def _make(self, name):
        path = os.path.join(self.test_dir, name)
        with open(path, "wb"):
            pass
        return path

    def test_run_emits_outcomes_as_signals(self):
        from core.workers import ConversionWorker

        files = [self._make("東京.mp3"), os.path.join(self.test_dir, "gone.mp3")]
        converter = FileConverter(files, ConverterConfig(), _romanize, _romanize)
        w = ConversionWorker(converter)

        converted, failed, progress, finished = [], [], [], []
        w.file_converted.connect(lambda old, new: converted.append((old, new)))
        w.file_failed.connect(lambda name, err: failed.append((name, err)))
        w.progress.connect(lambda cur, total: progress.append((cur, total)))
        w.finished.connect(lambda ok, bad: finished.append((ok, bad)))
        w.run()

        self.assertEqual(converted, [("東京.mp3", "Tokyo.mp3")])
        self.assertEqual(failed, [("gone.mp3", "File not found")])
        self.assertEqual(progress, [(1, 2), (2, 2)])
        self.assertEqual(finished, [(1, 1)])
        self.assertTrue(os.path.exists(os.path.join(self.test_dir, "Tokyo.mp3")))

    def test_stop_halts_after_current_file(self):
        from core.workers import ConversionWorker

        files = [self._make("東京.mp3"), self._make("東京2.mp3")]
        converter = FileConverter(files, ConverterConfig(), _romanize, _romanize)
        w = ConversionWorker(converter)

        finished = []
        w.file_converted.connect(lambda old, new: w.stop())
        w.finished.connect(lambda ok, bad: finished.append((ok, bad)))
        w.run()

        self.assertEqual(finished, [(1, 0)])
        self.assertTrue(os.path.exists(files[1]))


if __name__ == "__main__":
    unittest.main()
