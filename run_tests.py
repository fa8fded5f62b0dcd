#!/usr/bin/env python3
"""Test runner script for Contact Scout."""

import argparse
import os
import subprocess
import sys
import webbrowser
from pathlib import Path


def resolve_test_target(test_target):
    """Turn a bare file name like test_history_service.py into a tests/ path."""
    test_target = test_target.strip().lstrip("/")
    if test_target.startswith("-") or test_target.startswith("tests/"):
        return test_target

    name, sep, selector = test_target.partition("::")
    if "/" in name or "\\" in name:
        return f"tests/{test_target}"

    file_name = name if name.endswith(".py") else f"{name}.py"
    for root, _dirs, files in os.walk("tests"):
        if file_name in files:
            return os.path.join(root, file_name) + sep + selector
    return f"tests/{file_name}{sep}{selector}"


def open_html_report():
    """Open the HTML coverage report in the default browser."""
    report_path = Path("htmlcov/index.html")
    if not report_path.exists():
        print("❌ HTML coverage report not found at htmlcov/index.html")
        return
    report_url = f"file://{report_path.absolute()}"
    print(f"🌐 Opening coverage report: {report_url}")
    webbrowser.open(report_url)


def run_tests(test_target=None, pytest_args=None, open_report=False):
    """Run tests with coverage."""
    os.chdir(Path(__file__).parent)

    print("🧪 Running tests with coverage...")
    cmd = [
        sys.executable,
        "-m",
        "pytest",
        "-v",
        "--cov=contactscout",
        "--cov-report=term-missing",
        "--cov-report=html",
        "--tb=short",
    ]
    cmd.append(resolve_test_target(test_target) if test_target else "tests/")
    cmd.extend(pytest_args or [])

    result = subprocess.run(cmd)
    if result.returncode != 0:
        print("\n❌ Some tests failed!")
        return result.returncode

    print("\n✅ All tests passed!")
    print("📊 Coverage report generated in htmlcov/index.html")
    if open_report:
        open_html_report()
    return 0


if __name__ == "__main__":
    parser = argparse.ArgumentParser(
        description="Run the test suite with coverage",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python run_tests.py                                          # Run all tests
  python run_tests.py --open-report                            # Run tests and open HTML report
  python run_tests.py test_extraction_client.py                # Run one file (found under tests/)
  python run_tests.py test_result_assembler::TestArrayResponses  # Run one test class
  python run_tests.py tests/api/                               # Run a directory
        """,
    )
    parser.add_argument(
        "--open-report",
        action="store_true",
        help="Open HTML coverage report in browser after successful test run",
    )
    parser.add_argument("test_target", nargs="?", help="File, class, test or directory")
    parser.add_argument(
        "pytest_args",
        nargs=argparse.REMAINDER,
        help="Additional arguments passed to pytest (e.g. -k 'pattern')",
    )

    args = parser.parse_args()
    sys.exit(
        run_tests(
            test_target=args.test_target,
            pytest_args=args.pytest_args,
            open_report=args.open_report,
        )
    )
