# SPDX-License-Identifier: MPL-2.0
# Copyright (c) 2025 Daniel Schmidt

"""Fixtures for the Robot Framework integration layer."""

from pathlib import Path

import pytest


@pytest.fixture
def sample_output_xml(tmp_path: Path) -> Path:
    """Create a sample output.xml file for testing.

    Creates a Robot Framework output.xml with:
    - suite 'Web.Login' whose setup failed, one failed and one skipped test
    - suite 'Web.Logout' with one passed and one timed out test
    """
    output_xml = tmp_path / "output.xml"
    content = """<?xml version="1.0" encoding="UTF-8"?>
<robot generator="Robot 7.0" generated="2025-02-01T12:00:00.000" rpa="false" schemaversion="5">
<suite id="s1" name="Web" source="/work/web">
<suite id="s1-s1" name="Login" source="/work/web/login.robot">
<kw name="Open Browser" owner="SeleniumLibrary" type="SETUP">
<arg>https://example.test</arg>
<msg time="2025-02-01T12:00:00.500" level="FAIL">boom</msg>
<status status="FAIL" start="2025-02-01T12:00:00.100" elapsed="0.400">boom</status>
</kw>
<test id="s1-s1-t1" name="Valid login" line="10">
<status status="FAIL" start="2025-02-01T12:00:01.000" elapsed="0.000">Parent suite setup failed:
boom</status>
</test>
<test id="s1-s1-t2" name="Invalid login" line="15">
<status status="SKIP" start="2025-02-01T12:00:01.000" elapsed="0.000">Skipped</status>
</test>
<status status="FAIL" start="2025-02-01T12:00:00.000" elapsed="1.000"/>
</suite>
<suite id="s1-s2" name="Logout" source="/work/web/logout.robot">
<test id="s1-s2-t1" name="Logout works" line="5">
<kw name="Log" owner="BuiltIn">
<arg>Logging out</arg>
<status status="PASS" start="2025-02-01T12:00:02.000" elapsed="0.100"/>
</kw>
<status status="PASS" start="2025-02-01T12:00:02.000" elapsed="0.100"/>
</test>
<test id="s1-s2-t2" name="Session expires" line="9">
<kw name="Sleep" owner="BuiltIn">
<arg>5s</arg>
<status status="FAIL" start="2025-02-01T12:00:03.000" elapsed="1.000"/>
</kw>
<status status="FAIL" start="2025-02-01T12:00:03.000" elapsed="1.000">Test timeout 1 second exceeded.</status>
</test>
<status status="FAIL" start="2025-02-01T12:00:02.000" elapsed="2.000"/>
</suite>
<status status="FAIL" start="2025-02-01T12:00:00.000" elapsed="4.000"/>
</suite>
<statistics>
<total>
<stat pass="1" fail="2" skip="1">All Tests</stat>
</total>
<tag>
</tag>
<suite>
<stat pass="1" fail="2" skip="1" id="s1" name="Web">Web</stat>
</suite>
</statistics>
<errors>
</errors>
</robot>"""
    output_xml.write_text(content)
    return output_xml
