"""CLI entry point for the preview environment test step."""

import argparse
import asyncio
import json
import logging
import sys
from typing import Any

from preview_test_step.browser_tasks.client import BrowserUseClient
from preview_test_step.config import BrowserUseConfig, MissingApiKeyError
from preview_test_step.executor import TestExecutor
from preview_test_step.models.result import TestExecutionOutput
from preview_test_step.step import TEST_PLAN_STEP_ID, ExecuteTestsStep, WorkflowContext

STATUS_SYMBOLS = {
    "success": "✓",
    "fail": "✗",
}


def log_results_summary(log: logging.Logger, output: TestExecutionOutput) -> None:
    """Log a formatted summary of test results."""
    log.info("=" * 80)
    log.info("Test Results Summary:")
    log.info("=" * 80)

    if not output.needs_testing:
        log.info("Testing not needed")
        return

    for result in output.test_cases:
        symbol = STATUS_SYMBOLS.get(result.status, "?")
        log.info(
            "%s %s: %s (%.2fs)", symbol, result.title, result.status, result.duration
        )
        if result.task_id:
            log.info("  Task ID: %s", result.task_id)
        if result.message:
            log.info("  Message: %s", result.message)


async def run(
    config: BrowserUseConfig,
    preview_url: str,
    test_plan: Any | None,
) -> int:
    """Run the test step and return exit code."""
    log = logging.getLogger("preview_test_step")

    step_results: dict[str, Any] = {}
    if test_plan is not None:
        step_results[TEST_PLAN_STEP_ID] = test_plan
    context = WorkflowContext(
        input_data={"previewUrl": preview_url}, step_results=step_results
    )

    async with BrowserUseClient.from_config(config) as client:
        step = ExecuteTestsStep(executor=TestExecutor(client=client, config=config))
        output = await step.execute(context)

    log_results_summary(log, output)
    print(json.dumps(output.to_output(), indent=2))

    return 1 if output.has_failures else 0


def main() -> None:
    """CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Run planned test cases against a preview environment"
    )
    parser.add_argument(
        "--preview-url",
        required=True,
        help="URL of the deployed preview environment",
    )
    parser.add_argument(
        "--test-plan",
        default=None,
        help="JSON result of the test plan step (needsTesting, testCases)",
    )
    parser.add_argument(
        "--api-base-url",
        default=None,
        help="Browser Use API base URL",
    )
    parser.add_argument(
        "--timeout",
        type=float,
        default=None,
        help="Seconds to wait for each task before failing it",
    )
    parser.add_argument(
        "--poll-interval",
        type=float,
        default=None,
        help="Seconds between task status checks",
    )
    parser.add_argument(
        "--unknown-status",
        choices=["wait", "fail"],
        default=None,
        help="How to treat task statuses outside the known vocabulary",
    )

    args = parser.parse_args()

    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=sys.stderr,
    )

    overrides = {
        key: value
        for key, value in {
            "api_base_url": args.api_base_url,
            "timeout": args.timeout,
            "poll_interval": args.poll_interval,
            "unknown_status": args.unknown_status,
        }.items()
        if value is not None
    }
    try:
        config = BrowserUseConfig.from_env(**overrides)
    except MissingApiKeyError as e:
        parser.error(str(e))

    test_plan: Any | None = None
    if args.test_plan is not None:
        try:
            test_plan = json.loads(args.test_plan)
        except json.JSONDecodeError as e:
            parser.error(f"--test-plan is not valid JSON: {e}")

    exit_code = asyncio.run(run(config, args.preview_url, test_plan))
    sys.exit(exit_code)


if __name__ == "__main__":  # pragma: no cover
    main()
