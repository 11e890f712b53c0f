"""Pytest configuration and fixtures for CLI tests."""

import json

import pytest
from click.testing import CliRunner


@pytest.fixture
def cli_runner():
    """Click CLI test runner with custom invoke method."""

    class LibrarianCliRunner(CliRunner):
        def invoke(self, args, **kwargs):  # type: ignore
            """Invoke the librarian CLI when given a list of arguments."""
            from librarian.cli.main import cli

            if isinstance(args, list):
                return super().invoke(cli, args, **kwargs)
            return super().invoke(args, **kwargs)

    return LibrarianCliRunner()


@pytest.fixture
def lib_args(library_file):
    """Global options pointing the CLI at the sample library."""
    return ["--no-color", "--quiet", "--library", str(library_file)]


@pytest.fixture
def parse_json():
    """Parse the JSON document printed on the last output line."""

    def _parse(output: str):
        return json.loads(output.strip().splitlines()[-1])

    return _parse
