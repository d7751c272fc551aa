from __future__ import annotations

from pathlib import Path
from unittest.mock import MagicMock, patch

from db_distiller.services.progress import ProgressTracker


def test_progress_disabled_without_tty():
    with patch("db_distiller.services.progress.is_tty_enabled", return_value=False):
        tracker = ProgressTracker(3)
    assert tracker.pbar is None
    tracker.start_file(Path("a.xlsx"))
    tracker.finish_file(matched=1)
    tracker.close()


def test_progress_updates_tqdm_on_tty():
    bar = MagicMock()
    with patch("db_distiller.services.progress.is_tty_enabled", return_value=True), \
         patch("db_distiller.services.progress.tqdm", return_value=bar) as tqdm_cls:
        with ProgressTracker(2) as tracker:
            tracker.start_file(Path("data/one.xlsx"))
            tracker.finish_file(matched=4)

    assert tqdm_cls.call_args.kwargs["total"] == 2
    assert tqdm_cls.call_args.kwargs["desc"] == "Distilling workbooks"
    bar.set_description.assert_any_call("Distilling workbooks (one.xlsx)")
    bar.update.assert_called_once_with(1)
    bar.set_postfix.assert_called_once_with(matched=4)
    bar.close.assert_called_once()
    assert tracker.pbar is None
