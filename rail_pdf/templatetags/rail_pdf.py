"""Template tags for PDF headers, footers and page flow."""
from django import template
from django.utils.safestring import mark_safe

register = template.Library()


@register.simple_tag
def page_number():
    """Current page number, filled in by the renderer in headers and footers."""
    return mark_safe('<span class="pageNumber"></span>')


@register.simple_tag
def total_pages():
    """Total page count, filled in by the renderer in headers and footers."""
    return mark_safe('<span class="totalPages"></span>')


@register.simple_tag
def page_break():
    return mark_safe('<div style="page-break-after: always;"></div>')
