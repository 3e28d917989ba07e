"""Module test running the CLI against a WireMock Browser Use API."""

import json
import os
import subprocess
import sys

from wiremock.client import (
    HttpMethods,
    Mapping,
    MappingRequest,
    MappingResponse,
    Mappings,
)

from preview_test_step.testing.browser_tasks.payloads import create_task_response, task


def test_cli_reports_results(api_base_url: str) -> None:
    """CLI dispatches tasks, polls them and prints the downstream output."""
    Mappings.delete_all_mappings()

    Mappings.create_mapping(
        Mapping(
            request=MappingRequest(
                method=HttpMethods.POST,
                url_path="/api/v2/tasks",
                headers={"X-Browser-Use-API-Key": {"equalTo": "bu-module-key"}},
            ),
            response=MappingResponse(
                status=202,
                headers={"Content-Type": "application/json"},
                json_body=create_task_response(task_id="task-789"),
            ),
        )
    )

    Mappings.create_mapping(
        Mapping(
            request=MappingRequest(
                method=HttpMethods.GET,
                url_path="/api/v2/tasks/task-789",
            ),
            response=MappingResponse(
                status=200,
                headers={"Content-Type": "application/json"},
                json_body=task(task_id="task-789", status="finished", is_success=True),
            ),
        )
    )

    result = subprocess.run(
        [
            sys.executable,
            "-m",
            "preview_test_step.cli",
            "--preview-url",
            "https://pr-1.preview.example.com",
            "--test-plan",
            json.dumps(
                {
                    "needsTesting": True,
                    "testCases": [
                        {"title": "Homepage", "description": "Hero is visible."},
                        {"title": "Search", "description": "Results appear."},
                    ],
                }
            ),
            "--api-base-url",
            api_base_url,
            "--poll-interval",
            "0.1",
        ],
        env={**os.environ, "BROWSER_USE_API_KEY": "bu-module-key"},
        capture_output=True,
        text=True,
        timeout=60,
    )

    assert result.returncode == 0, (
        f"cli failed:\nstdout: {result.stdout}\nstderr: {result.stderr}"
    )

    output = json.loads(result.stdout)
    assert output["needsTesting"] is True
    assert sorted(output["testCases"], key=lambda r: r["title"]) == [
        {"title": "Homepage", "status": "success"},
        {"title": "Search", "status": "success"},
    ]
