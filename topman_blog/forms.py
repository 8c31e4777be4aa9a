"""
Request validation for topman_blog.

Forms are bound to already-parsed request data (QueryDict or JSON dict) and
report every invalid field at once.
"""
from django import forms
from django.contrib.auth import get_user_model

from .conf import blog_settings
from .text import ParseError, parse_bool, parse_tags


class TagsField(forms.Field):
    """Tags as a list, JSON array string or comma-separated string."""

    def to_python(self, value):
        if value in self.empty_values:
            return None
        result = parse_tags(value)
        if isinstance(result, ParseError):
            raise forms.ValidationError(result.message, code="invalid")
        return list(result.tags)


class BooleanStringField(forms.Field):
    """Accepts "true"/"false" strings from multipart forms and JSON booleans."""

    def to_python(self, value):
        if value in self.empty_values:
            return None
        # Case-insensitive and whitespace-tolerant, so "TRUE" and " true " count as true
        return parse_bool(value)


class PostForm(forms.Form):
    """Create a post. Field names match the wire format."""

    title = forms.CharField(
        max_length=blog_settings.TITLE_MAX_LENGTH,
        error_messages={
            "required": "Title is required",
            "max_length": f"Title cannot be more than {blog_settings.TITLE_MAX_LENGTH} characters",
        },
    )
    content = forms.CharField(
        strip=False,
        error_messages={"required": "Content is required"},
    )
    excerpt = forms.CharField(
        required=False,
        max_length=blog_settings.EXCERPT_MAX_LENGTH,
        error_messages={
            "max_length": f"Excerpt cannot be more than {blog_settings.EXCERPT_MAX_LENGTH} characters",
        },
    )
    category = forms.CharField(error_messages={"required": "Category is required"})
    tags = TagsField(required=False)
    isPublished = BooleanStringField(required=False)
    featuredImage = forms.ImageField(required=False)

    def clean_content(self):
        content = self.cleaned_data["content"]
        if self.fields["content"].required and not content.strip():
            raise forms.ValidationError("Content is required", code="required")
        return content

    def provided_data(self):
        """Cleaned values for the fields present in the request."""
        return {
            name: value
            for name, value in self.cleaned_data.items()
            if name in self.data or name in self.files
        }


class PostUpdateForm(PostForm):
    """Partial update: every field is optional, but sent fields may not be blank."""

    NON_BLANK_FIELDS = ("title", "content", "category")

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        for field in self.fields.values():
            field.required = False

    def clean(self):
        cleaned_data = super().clean()
        for name in self.NON_BLANK_FIELDS:
            if name not in self.data or name in self.errors:
                continue
            if not str(cleaned_data.get(name) or "").strip():
                self.add_error(name, self.fields[name].error_messages["required"])
        return cleaned_data


class CommentForm(forms.Form):
    content = forms.CharField(
        max_length=blog_settings.COMMENT_MAX_LENGTH,
        error_messages={"required": "Comment content is required"},
    )


class ReactionForm(forms.Form):
    emoji = forms.CharField(
        strip=True,
        error_messages={"required": "Please provide an emoji"},
    )

    def clean_emoji(self):
        emoji = self.cleaned_data["emoji"]
        if emoji not in blog_settings.REACTION_EMOJIS:
            raise forms.ValidationError(
                "Emoji must be one of: " + " ".join(blog_settings.REACTION_EMOJIS),
                code="invalid_choice",
            )
        return emoji


class CategoryForm(forms.Form):
    name = forms.CharField(
        max_length=blog_settings.CATEGORY_NAME_MAX_LENGTH,
        error_messages={
            "required": "Category name is required",
            "max_length": (
                "Category name cannot be more than "
                f"{blog_settings.CATEGORY_NAME_MAX_LENGTH} characters"
            ),
        },
    )
    description = forms.CharField(
        required=False,
        max_length=blog_settings.CATEGORY_DESCRIPTION_MAX_LENGTH,
        error_messages={
            "max_length": (
                "Description cannot be more than "
                f"{blog_settings.CATEGORY_DESCRIPTION_MAX_LENGTH} characters"
            ),
        },
    )

    def provided_data(self):
        return {name: value for name, value in self.cleaned_data.items() if name in self.data}


class CategoryUpdateForm(CategoryForm):
    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        for field in self.fields.values():
            field.required = False


class RegisterForm(forms.Form):
    username = forms.CharField(
        min_length=3,
        max_length=30,
        error_messages={
            "required": "Username is required",
            "min_length": "Username must be at least 3 characters",
            "max_length": "Username cannot be more than 30 characters",
        },
    )
    email = forms.EmailField(
        error_messages={
            "required": "Email is required",
            "invalid": "Please provide a valid email",
        },
    )
    password = forms.CharField(
        min_length=6,
        strip=False,
        error_messages={
            "required": "Password is required",
            "min_length": "Password must be at least 6 characters",
        },
    )

    def clean_username(self):
        username = self.cleaned_data["username"]
        User = get_user_model()
        if User.objects.filter(username__iexact=username).exists():
            raise forms.ValidationError("Username is already taken", code="unique")
        return username

    def clean_email(self):
        email = self.cleaned_data["email"]
        User = get_user_model()
        if User.objects.filter(email__iexact=email).exists():
            raise forms.ValidationError("Email is already registered", code="unique")
        return email


class LoginForm(forms.Form):
    email = forms.EmailField(
        error_messages={
            "required": "Email is required",
            "invalid": "Please provide a valid email",
        },
    )
    password = forms.CharField(
        strip=False,
        error_messages={"required": "Password is required"},
    )
