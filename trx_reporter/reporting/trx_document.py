# SPDX-License-Identifier: MPL-2.0
# Copyright (c) 2025 Daniel Schmidt

"""Visual Studio TRX (TeamTest 2010) document builder.

The document has the layout consumed by Azure DevOps and other test
management tools:
- <TestRun> root with the run id, name and user
- <Times>, <TestSettings>/<Deployment>, <ResultSummary>/<Counters>
- one <UnitTest> definition, <TestEntry> and <UnitTestResult> per entry
"""

import logging
import re
import uuid
from collections import Counter
from pathlib import Path

from lxml import etree as ET

from trx_reporter.core.formatting import format_timestamp
from trx_reporter.core.models import ReportEntry, RunMetadata
from trx_reporter.core.types import Outcome

logger = logging.getLogger(__name__)

TRX_NAMESPACE = "http://microsoft.com/schemas/VisualStudio/TeamTest/2010"
UNIT_TEST_TYPE = "13cdc9d9-ddb5-4fa4-a97d-d965ccfc6d4b"
UNIT_TEST_ADAPTER = "Microsoft.VisualStudio.TestTools.TestTypes.Unit.UnitTestAdapter"
RESULTS_NOT_IN_A_LIST_ID = "8c84fa94-04c1-424b-9868-57a2d4851a1d"
ALL_LOADED_RESULTS_ID = "19431567-8539-422a-85d7-44ee4e166bda"

COUNTER_NAMES = (
    "total",
    "executed",
    "passed",
    "failed",
    "error",
    "timeout",
    "aborted",
    "inconclusive",
    "passedButRunAborted",
    "notRunnable",
    "notExecuted",
    "disconnected",
    "warning",
    "completed",
    "inProgress",
    "pending",
)


_INVALID_XML_CHARS = re.compile("[\x00-\x08\x0b\x0c\x0e-\x1f]")


def _xml_text(value: str) -> str:
    """Drop control characters that XML 1.0 cannot represent."""
    return _INVALID_XML_CHARS.sub("", value)


def _q(tag: str) -> str:
    return f"{{{TRX_NAMESPACE}}}{tag}"


def _set_if(element: ET._Element, name: str, value: str) -> None:
    # TRX dateTime attributes must be absent rather than empty
    if value:
        element.set(name, value)


class TrxDocument:
    """TRX report for one run.

    Attributes:
        metadata: Run-level metadata
        entries: Report entries in report order
    """

    def __init__(self, metadata: RunMetadata, entries: list[ReportEntry]) -> None:
        self.metadata = metadata
        self.entries = entries

    def counters(self) -> dict[str, int]:
        """Compute the result summary counters."""
        outcomes = Counter(entry.outcome for entry in self.entries)
        total = len(self.entries)
        not_run = outcomes[Outcome.NOT_EXECUTED] + outcomes[Outcome.PENDING]
        counts = dict.fromkeys(COUNTER_NAMES, 0)
        counts.update(
            total=total,
            executed=total - not_run,
            passed=outcomes[Outcome.PASSED],
            failed=outcomes[Outcome.FAILED],
            timeout=outcomes[Outcome.TIMEOUT],
            inconclusive=outcomes[Outcome.INCONCLUSIVE],
            notExecuted=outcomes[Outcome.NOT_EXECUTED],
            pending=outcomes[Outcome.PENDING],
            completed=total - not_run,
        )
        return counts

    def summary_outcome(self) -> str:
        counts = self.counters()
        if counts["failed"] or counts["timeout"]:
            return "Failed"
        return "Completed"

    def build(self) -> ET._Element:
        """Build the <TestRun> element tree."""
        meta = self.metadata
        root = ET.Element(_q("TestRun"), nsmap={None: TRX_NAMESPACE})
        root.set("id", meta.run_id)
        root.set("name", meta.name)
        root.set("runUser", meta.run_user)

        times = ET.SubElement(root, _q("Times"))
        creation = format_timestamp(meta.creation)
        times.set("creation", creation)
        times.set("queuing", creation)
        times.set("start", format_timestamp(meta.start))
        times.set("finish", format_timestamp(meta.finish))

        settings = ET.SubElement(root, _q("TestSettings"))
        settings.set("name", "default")
        settings.set("id", str(uuid.uuid4()))
        deployment = ET.SubElement(settings, _q("Deployment"))
        deployment.set("runDeploymentRoot", meta.deployment_root)

        summary = ET.SubElement(root, _q("ResultSummary"))
        summary.set("outcome", self.summary_outcome())
        counters = ET.SubElement(summary, _q("Counters"))
        for name, value in self.counters().items():
            counters.set(name, str(value))

        definitions = ET.SubElement(root, _q("TestDefinitions"))
        test_lists = ET.SubElement(root, _q("TestLists"))
        for name, list_id in (
            ("Results Not in a List", RESULTS_NOT_IN_A_LIST_ID),
            ("All Loaded Results", ALL_LOADED_RESULTS_ID),
        ):
            test_list = ET.SubElement(test_lists, _q("TestList"))
            test_list.set("name", name)
            test_list.set("id", list_id)
        test_entries = ET.SubElement(root, _q("TestEntries"))
        results = ET.SubElement(root, _q("Results"))

        for entry in self.entries:
            test_id = str(uuid.uuid4())
            self._add_definition(definitions, entry, test_id)

            test_entry = ET.SubElement(test_entries, _q("TestEntry"))
            test_entry.set("testId", test_id)
            test_entry.set("executionId", entry.execution_id)
            test_entry.set("testListId", RESULTS_NOT_IN_A_LIST_ID)

            self._add_result(results, entry, test_id)

        return root

    def _add_definition(
        self, definitions: ET._Element, entry: ReportEntry, test_id: str
    ) -> None:
        unit_test = ET.SubElement(definitions, _q("UnitTest"))
        unit_test.set("name", _xml_text(entry.test_name))
        unit_test.set("storage", entry.code_base)
        unit_test.set("id", test_id)
        execution = ET.SubElement(unit_test, _q("Execution"))
        execution.set("id", entry.execution_id)
        method = ET.SubElement(unit_test, _q("TestMethod"))
        method.set("codeBase", entry.code_base)
        method.set("adapterTypeName", UNIT_TEST_ADAPTER)
        method.set("className", entry.class_name)
        method.set("name", entry.method_name)

    def _add_result(self, results: ET._Element, entry: ReportEntry, test_id: str) -> None:
        result = ET.SubElement(results, _q("UnitTestResult"))
        result.set("executionId", entry.execution_id)
        result.set("testId", test_id)
        result.set("testName", _xml_text(entry.test_name))
        result.set("computerName", entry.computer_name)
        result.set("duration", entry.duration)
        _set_if(result, "startTime", entry.start_time)
        _set_if(result, "endTime", entry.end_time)
        result.set("testType", UNIT_TEST_TYPE)
        result.set("outcome", entry.outcome.value)
        result.set("testListId", RESULTS_NOT_IN_A_LIST_ID)
        result.set("relativeResultsDirectory", entry.execution_id)

        if entry.error_message or entry.error_stacktrace:
            output = ET.SubElement(result, _q("Output"))
            error_info = ET.SubElement(output, _q("ErrorInfo"))
            ET.SubElement(error_info, _q("Message")).text = _xml_text(entry.error_message)
            ET.SubElement(error_info, _q("StackTrace")).text = _xml_text(
                entry.error_stacktrace
            )

        if entry.result_files:
            result_files = ET.SubElement(result, _q("ResultFiles"))
            for path in entry.result_files:
                ET.SubElement(result_files, _q("ResultFile")).set("path", path)

    def to_bytes(self) -> bytes:
        """Serialize the document as pretty printed UTF-8 XML."""
        tree = ET.ElementTree(self.build())
        ET.indent(tree, space="  ")
        return ET.tostring(tree, encoding="UTF-8", xml_declaration=True)

    def write(self, output_path: Path) -> Path:
        """Write the document, creating parent directories.

        Raises:
            OSError: If the file cannot be written.
        """
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_bytes(self.to_bytes())
        logger.info(f"Wrote TRX report with {len(self.entries)} results to {output_path}")
        return output_path
