"""
Test configuration for plotseries.

Provides sample series data files in the three supported formats and a
build workspace populated with them.
"""

from pathlib import Path

import pytest

# ============================================================================
# Pytest Configuration
# ============================================================================


def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests for individual components")
    config.addinivalue_line("markers", "integration: Integration tests across modules")


# ============================================================================
# Sample Series Data
# ============================================================================

JUNIT_XML = b"""<?xml version="1.0" encoding="UTF-8"?>
<testsuite name="suite" tests="4">
  <testcase name="testOne" time="12.5"/>
  <testcase name="testTwo" time="3.25"/>
  <testcase name="testThree" time="27"/>
  <testcase name="testFour" time="1234.56"/>
</testsuite>
"""

UI_ACTIONS_XML = b"""<?xml version="1.0" encoding="UTF-8"?>
<metrics>
  <UIAction><name>AxTermDataService.updateItem</name><numCalls>7</numCalls></UIAction>
  <UIAction><name>AxTermDataService.createEntity</name><numCalls>2</numCalls></UIAction>
  <UIAction><name>AxTermDataService.deleteEntity</name><numCalls>3</numCalls></UIAction>
  <UIAction><name>AxTermDataService.findAll</name><numCalls>11</numCalls></UIAction>
  <UIAction><name>AxTermDataService.neverCalled</name><numCalls>0</numCalls></UIAction>
</metrics>
"""

RESULTS_XML = b"""<?xml version="1.0" encoding="UTF-8"?>
<results>
  <testcase>
    <one>0.521</one>
    <two>1.25</two>
  </testcase>
</results>
"""

TIMINGS_CSV = b"""compile,test,package,deploy
12,340,7,55
"""

PERF_PROPERTIES = b"""# generated by the perf harness
YVALUE=42.5
URL=http://ci.example.com/perf/report.html
"""


@pytest.fixture
def junit_xml() -> bytes:
    return JUNIT_XML


@pytest.fixture
def ui_actions_xml() -> bytes:
    return UI_ACTIONS_XML


@pytest.fixture
def results_xml() -> bytes:
    return RESULTS_XML


@pytest.fixture
def timings_csv() -> bytes:
    return TIMINGS_CSV


@pytest.fixture
def perf_properties() -> bytes:
    return PERF_PROPERTIES


@pytest.fixture
def workspace(tmp_path: Path) -> Path:
    """A build workspace holding one data file per series format."""
    reports = tmp_path / "build" / "reports"
    reports.mkdir(parents=True)
    (reports / "timings.csv").write_bytes(TIMINGS_CSV)
    (reports / "perf.properties").write_bytes(PERF_PROPERTIES)
    (reports / "TEST-suite.xml").write_bytes(JUNIT_XML)
    return tmp_path
