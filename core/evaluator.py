# core/evaluator.py

import builtins
import traceback
from typing import Any, Callable, Optional, Sequence


class ScriptEvaluator:
    """
    Runs user scripts as Python source against one shared globals dict.

    evaluate() and call() never raise script errors, SystemExit included:
    the error is kept and reported through has_uncaught_error()/take_error()
    until the host's checkpoint picks it up.  run() is the raw form used by
    include(), where errors must unwind into the calling script.
    """

    def __init__(self):
        self.globals: dict[str, Any] = {"__builtins__": builtins, "__name__": "__script__"}
        self._error: Optional[BaseException] = None
        self._backtrace: list[str] = []

    # ─── Global properties ────────────────────────────────────

    def set_property(self, name: str, value: Any) -> None:
        self.globals[name] = value

    def get_property(self, name: str, default: Any = None) -> Any:
        return self.globals.get(name, default)

    def register_function(self, name: str, fn: Callable[..., Any]) -> None:
        self.set_property(name, fn)

    # ─── Execution ────────────────────────────────────────────

    def run(self, source: str, file_name: str = "<script>") -> None:
        code_obj = compile(source, file_name, "exec")
        exec(code_obj, self.globals)

    def evaluate(self, source: str, file_name: str = "<script>") -> None:
        try:
            self.run(source, file_name)
        except BaseException as e:
            self._record(e)

    def call(self, fn: Callable[..., Any], args: Sequence[Any] = ()) -> Any:
        try:
            return fn(*args)
        except BaseException as e:
            self._record(e)
            return None

    # ─── Error reporting ──────────────────────────────────────

    def has_uncaught_error(self) -> bool:
        return self._error is not None

    @property
    def uncaught_error(self) -> Optional[BaseException]:
        return self._error

    @property
    def backtrace(self) -> list[str]:
        return list(self._backtrace)

    def take_error(self) -> tuple[Optional[BaseException], list[str]]:
        error, backtrace = self._error, self._backtrace
        self._error, self._backtrace = None, []
        return error, backtrace

    def _record(self, error: BaseException) -> None:
        self._error = error
        self._backtrace = traceback.format_exception(type(error), error, error.__traceback__)
