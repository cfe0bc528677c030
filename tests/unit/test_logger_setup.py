"""
Unit tests for the logging setup.
"""

import os
import subprocess
import sys
from pathlib import Path

import pytest
from loguru import logger

import neurostrand
from neurostrand.genotype.genome import Genome
from neurostrand.utils.logger_setup import setup_logger


@pytest.fixture
def captured():
    """Collect the messages reaching loguru, restoring the library default afterwards."""
    messages = []
    yield messages
    logger.remove()
    logger.disable("neurostrand")


class TestLoggerSetup:
    """Test setup_logger() and the library's silent default."""

    def test_import_writes_nothing(self):
        """Importing the package must not reach loguru's default stderr sink."""
        src_dir = Path(__file__).parent.parent.parent / "src"
        python_path = [str(src_dir)] + ([os.environ["PYTHONPATH"]] if "PYTHONPATH" in os.environ else [])
        env = dict(os.environ, PYTHONPATH=os.pathsep.join(python_path))

        result = subprocess.run([sys.executable, "-c", "import neurostrand"],
                                capture_output=True, text=True, env=env, check=True)

        assert result.stderr == ""

    def test_silent_by_default(self, captured, random, tracker):
        logger.disable("neurostrand")
        logger.add(captured.append, level="DEBUG", format="{message}")

        Genome(2, 1, True, random, tracker).add_random_node_gene(random, tracker)

        assert captured == []

    def test_enabled_after_setup(self, captured, random, tracker):
        setup_logger(level="DEBUG", enable_colors=False)
        logger.add(captured.append, level="DEBUG", format="{message}")

        Genome(2, 1, True, random, tracker).add_random_node_gene(random, tracker)

        assert any("Split connection" in message for message in captured)

    def test_level_filters_console(self, capsys, captured, random, tracker):
        setup_logger(level="WARNING", enable_colors=False)

        Genome(2, 1, True, random, tracker).add_random_node_gene(random, tracker)

        assert "Split connection" not in capsys.readouterr().err

    def test_log_file(self, tmp_path, captured, random, tracker):
        log_file = tmp_path / "run.log"
        setup_logger(level="DEBUG", log_file=str(log_file), enable_colors=False)

        genome = Genome(1, 1, True, random, tracker)
        genome.add_random_connection_gene(3, random, tracker)
        logger.remove()

        assert "No connection gene added after 3 attempts" in log_file.read_text(encoding="utf-8")

    def test_exported_from_package(self):
        assert neurostrand.setup_logger is setup_logger
