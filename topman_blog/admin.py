"""
Django admin configuration for topman_blog.
"""
from django import forms
from django.contrib import admin
from django.utils.text import slugify

from .exceptions import DUPLICATE_TITLE_MESSAGE
from .models import Category, Comment, Post, Reaction
from .text import slugify_title


class PostAdminForm(forms.ModelForm):
    """Rejects titles whose slug the author already uses."""

    class Meta:
        model = Post
        fields = "__all__"

    def clean(self):
        cleaned_data = super().clean()
        title = cleaned_data.get("title")
        author = cleaned_data.get("author")
        if title and author:
            qs = Post.objects.filter(slug=slugify_title(title), author=author)
            if self.instance.pk:
                qs = qs.exclude(pk=self.instance.pk)
            if qs.exists():
                raise forms.ValidationError(DUPLICATE_TITLE_MESSAGE)
        return cleaned_data


class CategoryAdminForm(forms.ModelForm):
    """Rejects names that slugify to nothing or to another category's slug."""

    class Meta:
        model = Category
        fields = "__all__"

    def clean_name(self):
        name = self.cleaned_data["name"]
        slug = slugify(name)
        if not slug:
            raise forms.ValidationError("Category name must contain letters or digits")
        qs = Category.objects.filter(slug=slug)
        if self.instance.pk:
            qs = qs.exclude(pk=self.instance.pk)
        if qs.exists():
            raise forms.ValidationError("A category with this name already exists")
        return name


class CommentInline(admin.TabularInline):
    """Read-only list of a post's comments."""

    model = Comment
    extra = 0
    fields = ["author", "content", "created_at"]
    readonly_fields = ["author", "content", "created_at"]
    can_delete = False
    show_change_link = True

    def has_add_permission(self, request, obj=None):
        return False


@admin.register(Category)
class CategoryAdmin(admin.ModelAdmin):
    form = CategoryAdminForm
    list_display = ["name", "slug", "post_count", "created_at"]
    search_fields = ["name", "slug", "description"]
    readonly_fields = ["slug", "created_at", "updated_at"]

    def save_model(self, request, obj, form, change):
        obj.slug = slugify(obj.name)
        super().save_model(request, obj, form, change)


@admin.register(Post)
class PostAdmin(admin.ModelAdmin):
    form = PostAdminForm
    list_display = [
        "title_preview",
        "author",
        "category",
        "is_published",
        "view_count",
        "created_at",
    ]
    list_filter = ["is_published", "category", "created_at"]
    search_fields = ["title", "content", "excerpt", "author__username"]
    raw_id_fields = ["author", "category"]
    date_hierarchy = "created_at"
    inlines = [CommentInline]
    readonly_fields = ["slug", "view_count", "created_at", "updated_at"]

    fieldsets = (
        (None, {
            "fields": ("title", "slug", "content", "excerpt", "author")
        }),
        ("Taxonomy", {
            "fields": ("category", "tags")
        }),
        ("Status", {
            "fields": ("is_published", "featured_image")
        }),
        ("Metadata", {
            "fields": ("view_count", "created_at", "updated_at"),
            "classes": ("collapse",),
        }),
    )

    actions = ["publish_posts", "unpublish_posts"]

    def title_preview(self, obj):
        """Truncated title for list display."""
        return obj.title[:60] + "..." if len(obj.title) > 60 else obj.title

    title_preview.short_description = "Title"

    def save_model(self, request, obj, form, change):
        obj.slug = slugify_title(obj.title)
        super().save_model(request, obj, form, change)

    @admin.action(description="Publish selected posts")
    def publish_posts(self, request, queryset):
        count = queryset.update(is_published=True)
        self.message_user(request, f"{count} posts published.")

    @admin.action(description="Unpublish selected posts")
    def unpublish_posts(self, request, queryset):
        count = queryset.update(is_published=False)
        self.message_user(request, f"{count} posts unpublished.")


@admin.register(Comment)
class CommentAdmin(admin.ModelAdmin):
    list_display = ["preview", "author", "post", "created_at"]
    list_filter = ["created_at"]
    search_fields = ["content", "author__username", "post__title"]
    raw_id_fields = ["post", "author"]
    readonly_fields = ["created_at"]


@admin.register(Reaction)
class ReactionAdmin(admin.ModelAdmin):
    list_display = ["user", "comment", "emoji", "reaction_type", "created_at"]
    list_filter = ["emoji", "created_at"]
    search_fields = ["user__username", "comment__content"]
    raw_id_fields = ["user", "comment"]
