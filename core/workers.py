from PyQt6.QtCore import QThread, pyqtSignal

from core.converter import ConversionEvent, FileConverter


class ConversionWorker(QThread):
    progress = pyqtSignal(int, int)  # current, total
    file_converted = pyqtSignal(str, str)  # old name, new name
    file_failed = pyqtSignal(str, str)  # name, error message
    finished = pyqtSignal(int, int)  # converted_count, failed_count
    error = pyqtSignal(str)

    def __init__(self, converter: FileConverter):
        super().__init__()
        self.converter = converter
        self.is_running = True

    def run(self):
        converted_count = 0
        failed_count = 0
        total = len(self.converter.files)
        current = 0

        try:
            for outcome in self.converter.convert():
                if outcome.event == ConversionEvent.COMPLETED:
                    break

                current += 1
                if outcome.event == ConversionEvent.CONVERTED:
                    converted_count += 1
                    self.file_converted.emit(outcome.old_name, outcome.new_name)
                else:
                    failed_count += 1
                    self.file_failed.emit(outcome.old_name or "", outcome.error or "")

                self.progress.emit(current, total)

                if not self.is_running:
                    break

            self.finished.emit(converted_count, failed_count)

        except Exception as e:
            self.error.emit(str(e))

    def stop(self):
        self.is_running = False
