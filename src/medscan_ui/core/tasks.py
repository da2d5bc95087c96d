"""
Background Task Execution
==========================

Runs blocking work (image decode, the backend request) on Qt's global thread
pool so the GUI stays responsive. Results come back through Qt signals, which
Qt delivers on the GUI thread; the session is only ever touched from there.

Classes
-------
TaskSignals
    Signals carrying a task's return value or error message
Task
    QRunnable wrapper around a function call

Functions
---------
submit
    Start a function on the global pool and return its signals

Examples
--------
>>> from medscan_ui.core.tasks import submit
>>> from medscan_ui.core.image_io import read_image_handle
>>> signals = submit(read_image_handle, "scan.png",
...                  on_finished=session.image_loaded,
...                  on_error=lambda msg: print(f"Error: {msg}"))
"""

import logging

from PySide6.QtCore import QObject, Signal, QRunnable, QThreadPool

logger = logging.getLogger(__name__)


class TaskSignals(QObject):
    """
    Signals emitted by a :class:`Task`.

    Signals
    -------
    finished : Signal(object)
        Return value of the function
    error : Signal(str)
        Message of the exception the function raised
    """

    finished = Signal(object)
    error = Signal(str)


class Task(QRunnable):
    """
    Runs ``fn(*args, **kwargs)`` once on a worker thread.

    Exactly one of ``signals.finished`` or ``signals.error`` is emitted.
    Tasks cannot be cancelled once started.
    """

    def __init__(self, fn, *args, **kwargs):
        super().__init__()
        self.fn = fn
        self.args = args
        self.kwargs = kwargs
        self.signals = TaskSignals()

    def run(self):
        try:
            res = self.fn(*self.args, **self.kwargs)
        except Exception as e:
            logger.exception("Background task %s failed", getattr(self.fn, "__name__", self.fn))
            self.signals.error.emit(str(e))
            return
        self.signals.finished.emit(res)


def submit(fn, *args, on_finished=None, on_error=None, **kwargs) -> TaskSignals:
    """
    Run a function on the global thread pool.

    Parameters
    ----------
    fn : callable
        Blocking function to run
    *args, **kwargs
        Arguments for ``fn``
    on_finished, on_error : callable, optional
        Connected before the task starts, so a fast task cannot emit into
        an unconnected signal

    Returns
    -------
    TaskSignals
        Connect ``finished`` and ``error`` to handle the outcome
    """
    t = Task(fn, *args, **kwargs)
    if on_finished is not None:
        t.signals.finished.connect(on_finished)
    if on_error is not None:
        t.signals.error.connect(on_error)
    QThreadPool.globalInstance().start(t)
    return t.signals
