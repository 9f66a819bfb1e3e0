# blog/models.py
from __future__ import annotations

from django.core.exceptions import ValidationError
from django.db import models
from django.urls import reverse
from django.utils import timezone

from . import post_types
from .utils import unique_slug


# ──────────────────────────────────────────────────────────────────────────────
# Tag
# ──────────────────────────────────────────────────────────────────────────────
class Tag(models.Model):
    name = models.CharField("Название", max_length=48, unique=True)
    slug = models.SlugField("Слаг", max_length=64, unique=True, db_index=True)

    class Meta:
        ordering = ["name"]
        verbose_name = "Тег"
        verbose_name_plural = "Теги"

    def __str__(self) -> str:
        return self.name

    def save(self, *args, **kwargs):
        if not self.slug:
            self.slug = unique_slug(self, self.name, fallback="tag", max_length=64)
        return super().save(*args, **kwargs)


# ──────────────────────────────────────────────────────────────────────────────
# Category
# ──────────────────────────────────────────────────────────────────────────────
class Category(models.Model):
    name = models.CharField("Название", max_length=80, unique=True)
    slug = models.SlugField("Слаг", max_length=96, unique=True, db_index=True)
    parent = models.ForeignKey(
        "self",
        null=True,
        blank=True,
        on_delete=models.SET_NULL,
        related_name="children",
        verbose_name="Родитель",
    )

    class Meta:
        ordering = ["name"]
        verbose_name = "Категория"
        verbose_name_plural = "Категории"

    def __str__(self) -> str:
        return self.name

    def save(self, *args, **kwargs):
        if not self.slug:
            self.slug = unique_slug(self, self.name, fallback="category", max_length=96)
        return super().save(*args, **kwargs)


# ──────────────────────────────────────────────────────────────────────────────
# Статусы и менеджер
# ──────────────────────────────────────────────────────────────────────────────
class PostStatus(models.TextChoices):
    PUBLISH = "publish", "Опубликовано"
    FUTURE = "future", "Запланировано"
    DRAFT = "draft", "Черновик"
    PENDING = "pending", "На модерации"
    PRIVATE = "private", "Личное"
    TRASH = "trash", "Корзина"
    AUTO_DRAFT = "auto-draft", "Авточерновик"


# статусы, которые не попадают в выборку "any"
EXCLUDED_FROM_ANY = (PostStatus.TRASH, PostStatus.AUTO_DRAFT)


class PostQuerySet(models.QuerySet):
    def published(self) -> "PostQuerySet":
        return self.filter(status=PostStatus.PUBLISH)

    def any_status(self) -> "PostQuerySet":
        return self.exclude(status__in=EXCLUDED_FROM_ANY)

    def of_type(self, *names: str) -> "PostQuerySet":
        return self.filter(post_type__in=names)


# ──────────────────────────────────────────────────────────────────────────────
# Post (и страницы, и записи: различаются post_type)
# ──────────────────────────────────────────────────────────────────────────────
class Post(models.Model):
    title = models.CharField("Заголовок", max_length=180)
    slug = models.SlugField("Слаг", max_length=200, unique=True, blank=True)
    post_type = models.CharField("Тип", max_length=20, default="post", db_index=True)
    status = models.CharField(
        "Статус", max_length=20, choices=PostStatus.choices,
        default=PostStatus.DRAFT, db_index=True,
    )
    excerpt = models.TextField("Краткое описание", max_length=300, blank=True)
    body = models.TextField("Текст", blank=True)

    tags = models.ManyToManyField(
        "Tag", blank=True, related_name="posts", verbose_name="Теги",
    )
    categories = models.ManyToManyField(
        "Category", blank=True, related_name="posts", verbose_name="Категории",
    )

    published_at = models.DateTimeField("Дата публикации", default=timezone.now, db_index=True)
    created_at = models.DateTimeField("Создано", auto_now_add=True)
    updated_at = models.DateTimeField("Обновлено", auto_now=True)

    objects = PostQuerySet.as_manager()

    class Meta:
        ordering = ["-published_at", "-id"]
        verbose_name = "Запись"
        verbose_name_plural = "Записи"
        indexes = [
            models.Index(fields=["post_type", "status"], name="blog_post_type_status_idx"),
        ]

    def __str__(self) -> str:
        return self.title

    def get_absolute_url(self) -> str:
        return reverse("blog:detail", kwargs={"slug": self.slug})

    def clean(self) -> None:
        if post_types.get_post_type(self.post_type) is None:
            raise ValidationError({"post_type": f"Неизвестный тип записи: {self.post_type}"})

    def save(self, *args, **kwargs) -> None:
        if not self.slug:
            self.slug = unique_slug(self, self.title, fallback="post", max_length=200)
        super().save(*args, **kwargs)

    @property
    def is_published(self) -> bool:
        return self.status == PostStatus.PUBLISH
