"""
Web URL execution: open http(s) / mailto URLs and bare domains in the default browser.
"""

import webbrowser

from ...errors import ExecutionFailure
from ...models import ExecutionOutcome
from ...search.plugins.web_url import normalize_url
from ...utils.async_utils import run_in_executor
from ..base import ExecutionArgumentValidator, Executor


class WebUrlExecutionArgumentValidator(ExecutionArgumentValidator):

    def is_valid_for_execution(self, argument: str) -> bool:
        return normalize_url(argument) is not None


class WebUrlExecutor(Executor):

    async def execute(self, argument: str, privileged: bool = False) -> ExecutionOutcome:
        url = normalize_url(argument)
        if url is None:
            raise ExecutionFailure(f"Not a URL: {argument}")
        opened = await run_in_executor(webbrowser.open, url)
        if not opened:
            raise ExecutionFailure(f"No browser available to open {url}")
        return ExecutionOutcome.ok()
