from __future__ import annotations
from django import template
from django.utils.safestring import mark_safe

from ..block import BLOCK_NAME
from ..registry import render_block
from ..services import CurrentPost

register = template.Library()


@register.simple_tag(takes_context=True)
def site_counts_block(context, class_name: str = ""):
    """
    {% site_counts_block class_name="widget" %}
    Текущая запись берётся из контекста шаблона (post или object).
    """
    post_id = CurrentPost.from_context(context).current_post_id()
    attributes = {"className": class_name} if class_name else {}
    return mark_safe(render_block(BLOCK_NAME, attributes, context={"postId": post_id}))
