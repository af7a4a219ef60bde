"""
Bridge to the Playwright renderer process.

The bridge turns a ``RenderRequest`` into a Node.js invocation of the bundled
entry script, runs it with a timeout and hands back the base64 text printed by
the script. HTML content is staged on disk for the duration of the call only.
"""

import base64
import binascii
import logging
import os
import shutil
import subprocess
import sys
from dataclasses import dataclass, field
from importlib import resources
from typing import Optional, Sequence

from .config import get_pdf_settings
from .exceptions import NodeBinaryNotFoundError, PdfConfigurationError, PdfRenderError
from .options import (
    OPTIONS_SCHEMA_VERSION,
    Margins,
    PageOptions,
    serialize_margins,
    serialize_options,
)
from .staging import StagedResources, stage_resources

logger = logging.getLogger(__name__)

SCRIPT_NAME = "playwright.cjs"


@dataclass(frozen=True)
class RenderRequest:
    """
    Immutable snapshot of everything a single render call needs.

    Raises:
        PdfConfigurationError: When both HTML and a URL are given, or neither.
    """

    html: Optional[str] = None
    url: Optional[str] = None
    header_html: Optional[str] = None
    footer_html: Optional[str] = None
    options: PageOptions = field(default_factory=PageOptions)
    margins: Margins = field(default_factory=Margins)

    def __post_init__(self) -> None:
        has_html = bool(self.html and self.html.strip())
        if has_html and self.url:
            raise PdfConfigurationError(
                "Both HTML content (via html() or view()) and a URL (via from_url()) "
                "were provided. PDF can only be generated from one source at a time."
            )
        if not has_html and not self.url:
            raise PdfConfigurationError(
                "No content to render. Provide HTML via html() or view(), "
                "or a URL via from_url()."
            )

    @property
    def is_from_url(self) -> bool:
        return bool(self.url)


def bundled_script_path() -> str:
    """Return the filesystem path of the packaged Playwright entry script."""
    return os.fspath(resources.files("rail_pdf").joinpath("bin", SCRIPT_NAME))


def candidate_node_paths() -> list[str]:
    """Well-known Node.js install locations for the current platform."""
    if sys.platform.startswith("win"):
        candidates = []
        for env_name in ("ProgramFiles", "ProgramFiles(x86)"):
            root = os.environ.get(env_name)
            if root:
                candidates.append(os.path.join(root, "nodejs", "node.exe"))
        return candidates
    return [
        "/usr/local/bin/node",
        "/opt/homebrew/bin/node",
        "/usr/bin/node",
    ]


def decode_pdf(encoded: str) -> bytes:
    """
    Decode the base64 text printed by the renderer.

    Raises:
        PdfRenderError: If the text is not valid base64.
    """
    try:
        return base64.b64decode("".join(encoded.split()), validate=True)
    except (binascii.Error, ValueError) as exc:
        raise PdfRenderError("Failed to decode base64 content.") from exc


class RenderBridge:
    """Run the Playwright entry script for one request at a time."""

    def __init__(
        self,
        *,
        node_binary: Optional[str] = None,
        script_path: Optional[str] = None,
        timeout: Optional[float] = None,
        temp_dir: Optional[str] = None,
        temp_prefix: Optional[str] = None,
        node_modules_path: Optional[str] = None,
        extra_path: Optional[Sequence[str]] = None,
    ) -> None:
        pdf_settings = get_pdf_settings()
        self.node_binary = node_binary or pdf_settings.node_binary
        self.script_path = script_path or pdf_settings.script_path or bundled_script_path()
        self.timeout = timeout if timeout is not None else pdf_settings.timeout_seconds
        self.temp_dir = temp_dir or pdf_settings.temp_dir
        self.temp_prefix = temp_prefix or pdf_settings.temp_prefix
        self.node_modules_path = node_modules_path or pdf_settings.node_modules_path
        self.extra_path = list(
            extra_path if extra_path is not None else pdf_settings.extra_path
        )

    def locate_node_binary(self) -> str:
        """
        Resolve the Node.js executable.

        Order: explicitly configured path, platform install locations, PATH.

        Raises:
            NodeBinaryNotFoundError: If none of them resolves.
        """
        if self.node_binary:
            return self.node_binary

        for path in candidate_node_paths():
            if os.path.isfile(path):
                logger.debug("Using Node.js binary at %s", path)
                return path

        found = shutil.which("node")
        if found:
            logger.debug("Using Node.js binary from PATH: %s", found)
            return found

        raise NodeBinaryNotFoundError(
            "Node.js binary not found. Set RAIL_PDF['node_binary'] or call "
            "set_node_binary_path()."
        )

    def build_arguments(
        self, request: RenderRequest, staged: StagedResources, node_binary: str
    ) -> list[str]:
        args = [
            node_binary,
            self.script_path,
            f"--schemaVersion={OPTIONS_SCHEMA_VERSION}",
            f"--margins={serialize_margins(request.margins)}",
            f"--options={serialize_options(request.options)}",
        ]

        if request.is_from_url:
            args.append("--isFromUrl=true")
            args.append(f"--url={request.url}")
        else:
            args.append(f"--filePath={staged.document}")

        if staged.header is not None:
            args.append(f"--headerFilePath={staged.header}")
        if staged.footer is not None:
            args.append(f"--footerFilePath={staged.footer}")

        return args

    def build_environment(self) -> dict[str, str]:
        env = dict(os.environ)
        if not sys.platform.startswith("win") and self.extra_path:
            path_entries = [entry for entry in env.get("PATH", "").split(os.pathsep) if entry]
            for entry in self.extra_path:
                if entry not in path_entries:
                    path_entries.append(entry)
            env["PATH"] = os.pathsep.join(path_entries)
        if self.node_modules_path:
            env["NODE_PATH"] = os.fspath(self.node_modules_path)
        return env

    def render(self, request: RenderRequest) -> str:
        """
        Render the request and return the PDF as base64 text.

        Raises:
            NodeBinaryNotFoundError: If Node.js cannot be located.
            PdfResourceError: If staging fails.
            PdfRenderError: On process failure, timeout or empty output.
        """
        node_binary = self.locate_node_binary()

        with stage_resources(
            None if request.is_from_url else request.html,
            request.header_html,
            request.footer_html,
            base_dir=self.temp_dir,
            prefix=self.temp_prefix,
        ) as staged:
            args = self.build_arguments(request, staged, node_binary)
            logger.debug("Invoking PDF renderer: %s", args)
            output = self._run(args)

        logger.info("Rendered PDF (%d base64 characters)", len(output))
        return output

    def _run(self, args: list[str]) -> str:
        try:
            process = subprocess.run(
                args,
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE,
                text=True,
                timeout=self.timeout,
                env=self.build_environment(),
                check=False,
            )
        except subprocess.TimeoutExpired as exc:
            stderr = _as_text(exc.stderr)
            logger.error("PDF renderer timed out after %s seconds", self.timeout)
            raise PdfRenderError(
                f"PDF generation timed out after {self.timeout:g} seconds.",
                stderr=stderr,
            ) from exc
        except OSError as exc:
            logger.error("Failed to start PDF renderer %s: %s", args[0], exc, exc_info=True)
            raise PdfRenderError(
                f"Failed to start PDF renderer [{args[0]}]: {exc}",
            ) from exc

        if process.returncode != 0:
            logger.error(
                "PDF renderer exited with code %s: %s", process.returncode, process.stderr
            )
            raise PdfRenderError(
                f"Failed to generate PDF: {process.stderr}",
                stderr=process.stderr,
                returncode=process.returncode,
            )

        output = (process.stdout or "").strip()
        if not output:
            raise PdfRenderError(
                "PDF generation failed: No output received.",
                stderr=process.stderr,
                returncode=process.returncode,
            )
        return output


def _as_text(value: Optional[object]) -> Optional[str]:
    if value is None:
        return None
    if isinstance(value, bytes):
        return value.decode("utf-8", "replace")
    return str(value)
