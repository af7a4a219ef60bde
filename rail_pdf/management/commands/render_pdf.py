import json
from pathlib import Path

from django.core.management.base import BaseCommand, CommandError
from django.template import TemplateDoesNotExist
from django.template.loader import get_template

from rail_pdf.defaults import LIBRARY_DEFAULTS
from rail_pdf.enums import Format, Unit
from rail_pdf.exceptions import PdfError
from rail_pdf.facade import Pdf


class Command(BaseCommand):
    help = "Render a Django template, an HTML file or a URL to PDF."

    def add_arguments(self, parser):
        source = parser.add_mutually_exclusive_group(required=True)
        source.add_argument("--template", help="Django template name to render")
        source.add_argument("--url", help="http(s) URL to print")
        source.add_argument("--html-file", help="Path to an HTML file to print")

        parser.add_argument(
            "--context",
            default=None,
            help="JSON object passed as template context (with --template)",
        )
        parser.add_argument(
            "--output",
            "-o",
            default=LIBRARY_DEFAULTS["default_filename"],
            help="Output file path (defaults to document.pdf)",
        )
        parser.add_argument(
            "--base64",
            action="store_true",
            help="Print the PDF as base64 instead of writing a file",
        )

        parser.add_argument("--format", choices=[fmt.value for fmt in Format], type=_format_choice)
        parser.add_argument("--width", type=float)
        parser.add_argument("--height", type=float)
        parser.add_argument(
            "--unit",
            default=Unit.MILLIMETER.value,
            choices=[unit.value for unit in Unit],
            help="Unit for --width, --height and --margins",
        )
        parser.add_argument(
            "--margins",
            nargs=4,
            type=float,
            metavar=("TOP", "RIGHT", "BOTTOM", "LEFT"),
        )
        parser.add_argument("--landscape", action="store_true")
        parser.add_argument("--outline", action="store_true")
        parser.add_argument("--print-background", action="store_true")
        parser.add_argument("--prefer-css-page-size", action="store_true")
        parser.add_argument("--tagged", action="store_true")
        parser.add_argument("--scale", type=float)
        parser.add_argument("--page-ranges")
        parser.add_argument("--header-template", help="Django template name for the header")
        parser.add_argument("--footer-template", help="Django template name for the footer")
        parser.add_argument("--node-binary", help="Path to the Node.js executable")

    def handle(self, *args, **options):
        context = {}
        raw_context = options.get("context")
        if raw_context:
            try:
                context = json.loads(raw_context)
            except json.JSONDecodeError as exc:
                raise CommandError("Invalid JSON for --context") from exc
            if not isinstance(context, dict):
                raise CommandError("--context must be a JSON object")

        try:
            builder = self._configure(Pdf.create(), options, context)
            if options["base64"]:
                self.stdout.write(builder.base64())
                return
            output_path = builder.save(Path(options["output"]))
        except (PdfError, TemplateDoesNotExist) as exc:
            raise CommandError(str(exc)) from exc

        self.stdout.write(self.style.SUCCESS(f"Rendered: {output_path}"))

    def _configure(self, builder, options, context):
        unit = options["unit"]

        if options.get("template"):
            builder.view(options["template"], context)
        elif options.get("url"):
            builder.from_url(options["url"])
        else:
            html_path = Path(options["html_file"])
            try:
                builder.html(html_path.read_text(encoding="utf-8"))
            except OSError as exc:
                raise CommandError(f"Cannot read HTML file: {html_path}") from exc

        if options.get("header_template"):
            builder.header_template(get_template(options["header_template"]))
        if options.get("footer_template"):
            builder.footer_template(get_template(options["footer_template"]))

        if options.get("format"):
            builder.format(options["format"])
        if options.get("width") is not None:
            builder.width(options["width"], unit)
        if options.get("height") is not None:
            builder.height(options["height"], unit)
        if options.get("margins"):
            top, right, bottom, left = options["margins"]
            builder.margins(top, right, bottom, left, unit)
        if options.get("scale") is not None:
            builder.scale(options["scale"])
        if options.get("page_ranges") is not None:
            builder.page_ranges(options["page_ranges"])

        flags = {
            "landscape": builder.landscape,
            "outline": builder.outline,
            "print_background": builder.print_background,
            "prefer_css_page_size": builder.prefer_css_page_size,
            "tagged": builder.tagged,
        }
        for option_name, setter in flags.items():
            if options.get(option_name):
                setter()

        if options.get("node_binary"):
            builder.set_node_binary_path(options["node_binary"])

        return builder


def _format_choice(value):
    for fmt in Format:
        if fmt.value.lower() == value.lower():
            return fmt.value
    return value
