"""Maven POM generator for the generated REST-assured tests."""

from typing import NamedTuple

from curl_restassured.generator.config import GenerationConfig, PomConfig, PomProjectInfo
from curl_restassured.generator.draft import RequestDraft

SUREFIRE_VERSION = "3.2.2"
COMPILER_PLUGIN_VERSION = "3.11.0"


class Dependency(NamedTuple):
    comment: str
    group_id: str
    artifact_id: str
    version: str
    scope: str | None = None


REST_ASSURED = Dependency("REST Assured", "io.rest-assured", "rest-assured", "5.3.2", "test")
TESTNG = Dependency("TestNG", "org.testng", "testng", "7.8.0", "test")
LOMBOK = Dependency("Lombok (for POJO @Data, @Builder)", "org.projectlombok", "lombok", "1.18.30", "provided")
JACKSON = Dependency("Jackson (for JSON serialization)", "com.fasterxml.jackson.core", "jackson-databind", "2.15.3")
JSON_PATH = Dependency("JSON Path (for response parsing)", "io.rest-assured", "json-path", "5.3.2", "test")

# PomConfig switch -> dependencies it pulls in
OPTIONAL_DEPENDENCIES = {
    "include_junit": [
        Dependency("JUnit 5", "org.junit.jupiter", "junit-jupiter", "5.10.0", "test"),
    ],
    "include_allure": [
        Dependency("Allure TestNG reporting", "io.qameta.allure", "allure-testng", "2.24.0", "test"),
        Dependency("Allure REST Assured filter", "io.qameta.allure", "allure-rest-assured", "2.24.0", "test"),
    ],
    "include_extent": [
        Dependency("Extent Reports", "com.aventstack", "extentreports", "5.1.1", "test"),
    ],
    "include_excel": [
        Dependency("Apache POI (Excel test data)", "org.apache.poi", "poi-ooxml", "5.2.3"),
    ],
    "include_faker": [
        Dependency("JavaFaker (test data)", "com.github.javafaker", "javafaker", "1.0.2"),
    ],
    "include_logging": [
        Dependency("SLF4J API", "org.slf4j", "slf4j-api", "2.0.9"),
        Dependency("Logback", "ch.qos.logback", "logback-classic", "1.4.11"),
    ],
    "include_commons_io": [
        Dependency("Commons IO", "commons-io", "commons-io", "2.15.0"),
    ],
}


class PomGenerator:
    """Generates pom.xml content (full project or dependency block)."""

    def __init__(self, config: GenerationConfig):
        self.config = config
        self.pom: PomConfig = config.effective_pom_config

    def generate(self, draft: RequestDraft) -> str:
        dependencies = self.select_dependencies(draft)
        if self.pom.pom_type == "dependencies_only":
            return self._render_dependencies(dependencies, indent="") + "\n"
        return self._render_project(dependencies, self.pom.project_info)

    def select_dependencies(self, draft: RequestDraft) -> list[Dependency]:
        selected = [REST_ASSURED, TESTNG]
        if self.config.need_pojo:
            selected += [LOMBOK, JACKSON]
        if draft.body:
            selected.append(JSON_PATH)
        for switch, deps in OPTIONAL_DEPENDENCIES.items():
            if getattr(self.pom, switch):
                selected += deps
        return selected

    def _render_dependency(self, dep: Dependency, indent: str) -> list[str]:
        lines = [
            f"{indent}    <!-- {dep.comment} -->",
            f"{indent}    <dependency>",
            f"{indent}        <groupId>{dep.group_id}</groupId>",
            f"{indent}        <artifactId>{dep.artifact_id}</artifactId>",
            f"{indent}        <version>{dep.version}</version>",
        ]
        if dep.scope:
            lines.append(f"{indent}        <scope>{dep.scope}</scope>")
        lines.append(f"{indent}    </dependency>")
        return lines

    def _render_dependencies(self, dependencies: list[Dependency], indent: str) -> str:
        blocks = ["\n".join(self._render_dependency(dep, indent)) for dep in dependencies]
        return f"{indent}<dependencies>\n" + "\n\n".join(blocks) + f"\n{indent}</dependencies>"

    def _render_project(self, dependencies: list[Dependency], info: PomProjectInfo) -> str:
        java = self.pom.java_version
        java_release = "1.8" if java == "8" else java
        return f"""<?xml version="1.0" encoding="UTF-8"?>
<project xmlns="http://maven.apache.org/POM/4.0.0"
         xmlns:xsi="http://www.w3.org/2001/XMLSchema-instance"
         xsi:schemaLocation="http://maven.apache.org/POM/4.0.0 http://maven.apache.org/xsd/maven-4.0.0.xsd">
    <modelVersion>4.0.0</modelVersion>

    <groupId>{_xml(info.group_id)}</groupId>
    <artifactId>{_xml(info.artifact_id)}</artifactId>
    <version>{_xml(info.version)}</version>
    <name>{_xml(info.name)}</name>
    <description>{_xml(info.description)}</description>

    <properties>
        <maven.compiler.source>{java_release}</maven.compiler.source>
        <maven.compiler.target>{java_release}</maven.compiler.target>
        <project.build.sourceEncoding>UTF-8</project.build.sourceEncoding>
    </properties>

{self._render_dependencies(dependencies, indent="    ")}

    <build>
        <plugins>
            <plugin>
                <groupId>org.apache.maven.plugins</groupId>
                <artifactId>maven-compiler-plugin</artifactId>
                <version>{COMPILER_PLUGIN_VERSION}</version>
            </plugin>
            <plugin>
                <groupId>org.apache.maven.plugins</groupId>
                <artifactId>maven-surefire-plugin</artifactId>
                <version>{SUREFIRE_VERSION}</version>
            </plugin>
        </plugins>
    </build>
</project>
"""


def _xml(text: str) -> str:
    return text.replace("&", "&amp;").replace("<", "&lt;").replace(">", "&gt;")
