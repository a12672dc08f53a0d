import os
import json
import pandas as pd
from datetime import datetime
from typing import Any, Dict, List, Optional

from PIL import Image


class SessionLogger:
    def __init__(self, log_dir: str, session_name: str, save_images: bool = False):
        """
        Initializes the logger for one play session.

        Args:
            log_dir (str): The base directory for logs.
            session_name (str): Name of the session, e.g. "daily_15_20251018".
            save_images (bool): Whether rendered boards are written as PNG files.
        """
        self.timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        self.session_name = f"{session_name}_{self.timestamp}"
        self.run_dir = os.path.join(log_dir, self.session_name)
        self.images_dir = os.path.join(self.run_dir, "images")
        self.save_images = save_images
        self.logs: List[Dict[str, Any]] = []

    def log_step(self, step: int, data: Dict[str, Any]):
        """
        Logs a single step of the session.

        Args:
            step (int): The current step number.
            data (Dict[str, Any]): A dictionary of data to log for the step.
        """
        log_entry = {"step": step, "timestamp": datetime.now().isoformat(), **data}

        image = log_entry.pop("image", None)
        if self.save_images and isinstance(image, Image.Image):
            os.makedirs(self.images_dir, exist_ok=True)
            image_path = os.path.join(self.images_dir, f"step_{step}.png")
            image.save(image_path)
            log_entry["image_path"] = image_path

        self.logs.append(log_entry)

    def save_logs(self) -> Optional[str]:
        """Saves all collected logs to a JSON file plus a text summary."""
        if not self.logs:
            return None
        os.makedirs(self.run_dir, exist_ok=True)
        log_file = os.path.join(self.run_dir, "session_log.json")
        with open(log_file, "w") as f:
            json.dump(self.logs, f, indent=2, default=str)

        summary_file = os.path.join(self.run_dir, "summary.txt")
        self._create_summary_file(summary_file)
        return log_file

    def _create_summary_file(self, summary_file: str):
        """Create a human-readable summary file."""
        actions = [log for log in self.logs if log.get("step_type") == "action"]
        rejected = [log for log in actions if log.get("tool_result", {}).get("status") == "error"]

        with open(summary_file, "w") as f:
            f.write(f"Session Summary: {self.session_name}\n")
            f.write("=" * 60 + "\n")
            f.write(f"Actions Taken: {len(actions)}\n")
            f.write(f"Actions Rejected: {len(rejected)}\n")
            f.write("\nStep-by-step breakdown:\n")
            f.write("-" * 30 + "\n")

            for log in self.logs:
                step = log.get("step", "?")
                step_type = log.get("step_type", "unknown")

                if step_type in ("initial", "restored"):
                    f.write(f"Step {step}: {step_type.capitalize()} board\n")
                elif step_type == "action":
                    action = log.get("action", {})
                    result = log.get("tool_result", {})
                    f.write(f"Step {step}: Action '{action.get('action_type', 'unknown')}' "
                            f"{action.get('parameters', {})} -> {result.get('status')}\n")
                elif step_type == "complete":
                    f.write(f"Step {step}: COMPLETE in {log.get('moves')} moves\n")

    def save_results(self, results: Dict[str, Any], results_path: str):
        """
        Appends a finished session to the results table (CSV).

        Args:
            results (Dict[str, Any]): Flat dictionary describing the session.
            results_path (str): The path to the CSV file.
        """
        results_df = pd.DataFrame([results])

        if os.path.exists(results_path):
            try:
                existing_df = pd.read_csv(results_path)
                updated_df = pd.concat([existing_df, results_df], ignore_index=True)
            except (pd.errors.ParserError, pd.errors.EmptyDataError):
                updated_df = results_df
        else:
            parent = os.path.dirname(results_path)
            if parent:
                os.makedirs(parent, exist_ok=True)
            updated_df = results_df

        updated_df.to_csv(results_path, index=False)


def load_results(results_path: str) -> pd.DataFrame:
    """Read the results table; empty frame if it does not exist yet."""
    if not os.path.exists(results_path):
        return pd.DataFrame()
    try:
        return pd.read_csv(results_path)
    except pd.errors.EmptyDataError:
        return pd.DataFrame()


def summarize_results(df: pd.DataFrame) -> pd.DataFrame:
    """Per-mode counts, solve rate and move statistics."""
    if df.empty:
        return df
    grouped = df.groupby("game_mode")
    summary = pd.DataFrame({
        "sessions": grouped.size(),
        "solved": grouped["success"].sum(),
        "best_moves": grouped["moves"].min(),
        "mean_moves": grouped["moves"].mean().round(1),
    })
    return summary.reset_index()
