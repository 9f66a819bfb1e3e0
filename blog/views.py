# blog/views.py
from __future__ import annotations

from django.http import Http404, HttpRequest, HttpResponse
from django.shortcuts import render

from .models import Post


def detail(request: HttpRequest, slug: str) -> HttpResponse:
    """
    Публика видит только опубликованное.
    Staff/суперпользователь видит и остальные статусы (кроме корзины).
    """
    post = Post.objects.published().filter(slug=slug).first()
    if post is None and request.user.is_authenticated and (
        request.user.is_staff or request.user.is_superuser
    ):
        post = Post.objects.any_status().filter(slug=slug).first()

    if post is None:
        raise Http404("Запись не найдена")

    return render(request, "blog/detail.html", {"post": post})
