# blog/admin.py
from django.contrib import admin
from .models import Category, Post, Tag


@admin.register(Post)
class PostAdmin(admin.ModelAdmin):
    list_display = ("title", "post_type", "status", "published_at", "created_at")
    list_filter = ("post_type", "status", "published_at", "tags", "categories")
    search_fields = ("title", "excerpt", "body")
    prepopulated_fields = {"slug": ("title",)}
    filter_horizontal = ("tags", "categories")
    readonly_fields = ("created_at", "updated_at")
    fieldsets = (
        ("Контент", {
            "fields": ("title", "slug", "post_type", "excerpt", "body"),
        }),
        ("Таксономии", {
            "fields": ("tags", "categories"),
        }),
        ("Публикация", {
            "fields": ("status", "published_at", "created_at", "updated_at"),
        }),
    )


@admin.register(Tag)
class TagAdmin(admin.ModelAdmin):
    list_display = ("name", "slug")
    search_fields = ("name", "slug")


@admin.register(Category)
class CategoryAdmin(admin.ModelAdmin):
    list_display = ("name", "slug", "parent")
    search_fields = ("name", "slug")
