# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

import pytest

from detectscan.detect.args import apply_versioning_model, build_detect_args, maven_build_command
from detectscan.models import ScanConfig

BASE = ["--testProp1=1"]


def _full_config(**overrides):
    values = dict(
        server_url="https://server.url",
        token="apiToken",
        project_name="testName",
        code_location="testLocation",
        fail_on=["BLOCKER", "MAJOR"],
        scanners=["source"],
        scan_paths=["path1", "path2"],
        groups=["testGroup", "testGroup2"],
        version="1.0",
        versioning_model="major-minor",
        dependency_path="pathx",
        unmap=True,
        included_package_managers=["maven", "GRADLE"],
        excluded_package_managers=["npm", "NUGET"],
        maven_excluded_scopes=["TEST", "compile"],
        detect_tools=["DETECTOR"],
    )
    values.update(overrides)
    return ScanConfig(**values)


FULL_TAIL = [
    "--blackduck.url=https://server.url",
    "--blackduck.api.token=apiToken",
    "\"--detect.project.name='testName'\"",
    "\"--detect.project.version.name='1.0'\"",
    "\"--detect.project.user.groups='testGroup,testGroup2'\"",
    "--detect.policy.check.fail.on.severities=BLOCKER,MAJOR",
    "\"--detect.code.location.name='testLocation'\"",
    "--detect.source.path=pathx",
    "--detect.included.detector.types=MAVEN,GRADLE",
    "--detect.excluded.detector.types=NPM,NUGET",
    "--detect.maven.excluded.scopes=test,compile",
    "--detect.tools=DETECTOR",
]


def test_empty_config_emits_always_present_flags():
    assert build_detect_args(BASE, ScanConfig()) == [
        "--testProp1=1",
        "--blackduck.url=",
        "--blackduck.api.token=",
        "\"--detect.project.name=''\"",
        "\"--detect.project.version.name=''\"",
        "\"--detect.code.location.name=''\"",
        "--detect.source.path='.'",
    ]


def test_scan_properties_signature_paths_and_derived_code_location():
    config = ScanConfig(
        scan_properties=["--scan1=1", "--scan2=2"],
        server_url="https://server.url",
        token="apiToken",
        project_name="testName",
        version="1.0",
        versioning_model="major-minor",
        scanners=["signature"],
        scan_paths=["path1", "path2"],
    )
    assert build_detect_args(BASE, config) == [
        "--testProp1=1",
        "--scan1=1",
        "--scan2=2",
        "--blackduck.url=https://server.url",
        "--blackduck.api.token=apiToken",
        "\"--detect.project.name='testName'\"",
        "\"--detect.project.version.name='1.0'\"",
        "\"--detect.code.location.name='testName/1.0'\"",
        "--detect.blackduck.signature.scanner.paths=path1,path2",
        "--detect.source.path='.'",
    ]


def test_groups_fail_on_and_explicit_code_location():
    config = ScanConfig(
        server_url="https://server.url",
        token="apiToken",
        project_name="testName",
        version="1.0",
        code_location="testLocation",
        fail_on=["BLOCKER", "MAJOR"],
        scanners=["source"],
        scan_paths=["path1", "path2"],
        groups=["testGroup"],
    )
    assert build_detect_args(BASE, config) == [
        "--testProp1=1",
        "--blackduck.url=https://server.url",
        "--blackduck.api.token=apiToken",
        "\"--detect.project.name='testName'\"",
        "\"--detect.project.version.name='1.0'\"",
        "\"--detect.project.user.groups='testGroup'\"",
        "--detect.policy.check.fail.on.severities=BLOCKER,MAJOR",
        "\"--detect.code.location.name='testLocation'\"",
        "--detect.source.path='.'",
    ]


def test_groups_are_joined_in_order():
    args = build_detect_args([], ScanConfig(groups=["a", "b"]))
    assert "\"--detect.project.user.groups='a,b'\"" in args


def test_source_path_quoting_differs_for_default_and_explicit_path():
    assert build_detect_args([], ScanConfig())[-1] == "--detect.source.path='.'"
    assert build_detect_args([], ScanConfig(dependency_path="pathx"))[-1] == "--detect.source.path=pathx"


def test_unmap_is_inserted_directly_after_base_args():
    args = build_detect_args(BASE, _full_config())
    assert args == ["--testProp1=1", "--detect.project.codelocation.unmap=true", *FULL_TAIL]
    assert args.count("--detect.project.codelocation.unmap=true") == 1


def test_unmap_not_duplicated_when_base_args_already_unmap():
    base = ["--testProp1=1", "--detect.project.codelocation.unmap=true"]
    args = build_detect_args(base, _full_config())
    assert args.count("--detect.project.codelocation.unmap=true") == 1
    assert args[:2] == base


def test_unmap_respects_base_args_that_disable_unmap():
    base = ["--detect.project.codelocation.unmap=false"]
    args = build_detect_args(base, ScanConfig(unmap=True))
    assert [arg for arg in args if arg.startswith("--detect.project.codelocation.unmap")] == base
    assert args[0] == base[0]


def test_unmap_not_duplicated_when_scan_properties_already_unmap():
    config = _full_config(scan_properties=["--detect.project.codelocation.unmap=true", "--scan=1"])
    args = build_detect_args(BASE, config)
    assert args[:3] == ["--testProp1=1", "--detect.project.codelocation.unmap=true", "--scan=1"]
    assert args.count("--detect.project.codelocation.unmap=true") == 1


def test_unmap_drops_conflicting_false_property():
    config = _full_config(scan_properties=["--detect.project.codelocation.unmap=false"])
    args = build_detect_args(BASE, config)
    assert "--detect.project.codelocation.unmap=false" not in args


def test_scan_on_changes_adds_report_and_disables_unmap():
    args = build_detect_args(BASE, _full_config(scan_on_changes=True))
    assert args == ["--testProp1=1", "--report", *FULL_TAIL]


def test_scan_on_changes_strips_unmap_scan_property():
    config = _full_config(scan_on_changes=True, scan_properties=["--scan=1", "--detect.project.codelocation.unmap=true"])
    args = build_detect_args(BASE, config)
    assert args == ["--testProp1=1", "--report", "--scan=1", *FULL_TAIL]


def test_case_transforms():
    config = ScanConfig(
        included_package_managers=["maven", "GRADLE"],
        maven_excluded_scopes=["TEST", "compile"],
    )
    args = build_detect_args([], config)
    assert "--detect.included.detector.types=MAVEN,GRADLE" in args
    assert "--detect.maven.excluded.scopes=test,compile" in args


def test_builder_does_not_mutate_inputs():
    base = ["--a=1"]
    config = _full_config(scan_properties=["--detect.project.codelocation.unmap=false"])
    build_detect_args(base, config)
    assert base == ["--a=1"]
    assert config.scan_properties == ["--detect.project.codelocation.unmap=false"]
    assert build_detect_args(base, config) == build_detect_args(base, config)


def test_maven_build_command_resolves_repo_against_working_dir():
    config = ScanConfig(
        m2_path=".pipeline/local_repo",
        project_settings_file="project-settings.xml",
        global_settings_file="global-settings.xml",
    )
    args = build_detect_args(["./detect.sh"], config, working_dir="/root_folder")
    assert args[-1] == (
        "\"--detect.maven.build.command='--global-settings global-settings.xml "
        "--settings project-settings.xml -Dmaven.repo.local=/root_folder/.pipeline/local_repo'\""
    )


def test_maven_build_command_only_present_parts():
    assert maven_build_command(ScanConfig()) is None
    assert maven_build_command(ScanConfig(project_settings_file="s.xml")) == "\"--detect.maven.build.command='--settings s.xml'\""
    assert maven_build_command(ScanConfig(m2_path="/abs/repo"), working_dir="/ignored") == (
        "\"--detect.maven.build.command='-Dmaven.repo.local=/abs/repo'\""
    )


@pytest.mark.parametrize(
    ("model", "version", "expected"),
    [
        ("major", "1.2.3", "1"),
        ("major-minor", "1.2.3", "1.2"),
        ("major-minor", "1", "1.0"),
        ("semantic", "1.2", "1.2.0"),
        ("full", "1.2.3-SNAPSHOT", "1.2.3-SNAPSHOT"),
        ("", "1.2.3", "1.2.3"),
        ("major", "latest", "latest"),
    ],
)
def test_apply_versioning_model(model, version, expected):
    assert apply_versioning_model(model, version) == expected


def test_versioning_model_feeds_version_and_derived_code_location():
    args = build_detect_args([], ScanConfig(project_name="p", version="2.5.1", versioning_model="major"))
    assert "\"--detect.project.version.name='2'\"" in args
    assert "\"--detect.code.location.name='p/2'\"" in args
