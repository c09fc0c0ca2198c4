import json
import os
import threading
from datetime import datetime, timezone

class JSONLogger:
    def __init__(self, output_directory="logs/", log_file_prefix="turing_"):
        self.output_directory = output_directory
        self.log_file_prefix = log_file_prefix
        os.makedirs(self.output_directory, exist_ok=True)
        self._lock = threading.Lock()
        self.rotate()

    def _get_log_filename(self):
        filename = f"{self.log_file_prefix}{self.today}.jsonl"  # JSON lines format
        return os.path.join(self.output_directory, filename)

    def _write(self, path, entries):
        with self._lock:
            with open(path, "a", encoding="utf-8") as f:
                for entry in entries:
                    f.write(json.dumps(entry) + "\n")

    def _timestamp(self):
        return datetime.now(timezone.utc).isoformat()

    def log(self, entry: dict):
        """Log a single entry to the main run log."""
        self._write(self.current_log, [entry])

    def log_batch(self, entries: list):
        """Log a batch of entries to the main run log."""
        self._write(self.current_log, entries)

    def rotate(self):
        """Start a new main log file if the day has changed."""
        self.today = datetime.now(timezone.utc).strftime("%Y-%m-%d")
        self.current_log = self._get_log_filename()

    def log_run(self, result):
        """One record per input: final tape and halt reason, or the load error."""
        entry = result.to_entry()
        entry["timestamp"] = self._timestamp()
        self.log(entry)

    def log_summary(self, results: list):
        """Append a batch summary to the day's summary file."""
        entry = {
            "inputs": len(results),
            "halted": sum(1 for r in results if r.error is None and r.halt_reason != "step_limit"),
            "step_limited": sum(1 for r in results if r.halt_reason == "step_limit"),
            "errors": sum(1 for r in results if r.error is not None),
            "total_steps": sum(r.steps for r in results),
            "timestamp": self._timestamp(),
        }
        path = os.path.join(self.output_directory, f"summary_{self.today}.jsonl")
        self._write(path, [entry])
