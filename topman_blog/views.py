"""
Views for topman_blog.

All endpoints speak JSON: ``{"success": true, "data": ...}`` on success and
``{"success": false, "error": ...}`` on failure.
"""
from django.contrib.auth import authenticate, get_user_model, login
from django.utils.decorators import method_decorator
from django.views.decorators.csrf import ensure_csrf_cookie

from .conf import blog_settings
from .exceptions import Forbidden, NotAuthenticated, NotFound, ValidationError
from .forms import (
    CategoryForm,
    CategoryUpdateForm,
    CommentForm,
    LoginForm,
    PostForm,
    PostUpdateForm,
    ReactionForm,
    RegisterForm,
)
from .http import ApiView, success_response
from .selectors import get_category, get_post, list_categories, list_posts, search_posts
from .serializers import serialize_account, serialize_category, serialize_post
from .services import CategoryService, PostService


class PostListView(ApiView):
    """List posts with pagination, or create a post."""

    def get(self, request):
        page = list_posts(
            category_slug=request.GET.get("category"),
            query=request.GET.get("q"),
            page=request.GET.get("page"),
            limit=request.GET.get("limit"),
        )
        return success_response(
            [serialize_post(post) for post in page.posts],
            count=len(page.posts),
            total=page.total,
            page=page.page,
            pages=page.pages,
        )

    def post(self, request):
        form = self.validate(PostForm)
        post = PostService(request.user).create_post(form.provided_data())
        return success_response(serialize_post(post), status=201)


class PostSearchView(ApiView):
    """Unpaginated search over title, content and excerpt."""

    def get(self, request):
        query = request.GET.get("q", "").strip()
        if not query:
            raise ValidationError("Please provide a search query")
        posts = search_posts(query)
        return success_response([serialize_post(post) for post in posts], count=len(posts))


class PostDetailView(ApiView):
    """Display, update or delete a single post."""

    def get(self, request, id_or_slug):
        post = get_post(id_or_slug)
        if post is None:
            raise NotFound("Post not found")

        # Increment view count
        post.increment_view_count()
        return success_response(serialize_post(post))

    def put(self, request, id_or_slug):
        form = self.validate(PostUpdateForm)
        post = PostService(request.user).update_post(id_or_slug, form.provided_data())
        return success_response(serialize_post(post))

    def delete(self, request, id_or_slug):
        PostService(request.user).delete_post(id_or_slug)
        return success_response({})


class CommentCreateView(ApiView):
    """Add a comment to a post."""

    def post(self, request, pk):
        form = self.validate(CommentForm)
        post = PostService(request.user).add_comment(pk, form.cleaned_data["content"])
        return success_response(serialize_post(post))


class ReactionToggleView(ApiView):
    """Toggle a reaction on a comment."""

    def post(self, request, pk, comment_pk):
        form = self.validate(ReactionForm)
        post, action = PostService(request.user).react_to_comment(
            pk, comment_pk, form.cleaned_data["emoji"]
        )
        return success_response(serialize_post(post), action=action)


class CategoryListView(ApiView):
    def get(self, request):
        categories = [serialize_category(c, detail=True) for c in list_categories()]
        return success_response(categories, count=len(categories))

    def post(self, request):
        form = self.validate(CategoryForm)
        category = CategoryService(request.user).create_category(form.cleaned_data)
        return success_response(serialize_category(category, detail=True), status=201)


class CategoryDetailView(ApiView):
    def get(self, request, id_or_slug):
        category = get_category(id_or_slug)
        if category is None:
            raise NotFound("Category not found")
        return success_response(serialize_category(category, detail=True))

    def put(self, request, id_or_slug):
        form = self.validate(CategoryUpdateForm)
        category = CategoryService(request.user).update_category(
            id_or_slug, form.provided_data()
        )
        return success_response(serialize_category(category, detail=True))

    def delete(self, request, id_or_slug):
        CategoryService(request.user).delete_category(id_or_slug)
        return success_response({})


class RegisterView(ApiView):
    """Create an account and start a session for it."""

    public_methods = ("post",)

    def post(self, request):
        if not blog_settings.ALLOW_REGISTRATION:
            raise Forbidden("Registration is closed")
        form = self.validate(RegisterForm)
        User = get_user_model()
        user = User.objects.create_user(
            username=form.cleaned_data["username"],
            email=form.cleaned_data["email"],
            password=form.cleaned_data["password"],
        )
        login(request, user, backend="django.contrib.auth.backends.ModelBackend")
        return success_response(serialize_account(user), status=201)


class LoginView(ApiView):
    """Log in with email and password."""

    public_methods = ("post",)

    def post(self, request):
        form = self.validate(LoginForm)
        User = get_user_model()
        account = User.objects.filter(email__iexact=form.cleaned_data["email"]).first()
        user = None
        if account is not None:
            user = authenticate(
                request,
                username=account.get_username(),
                password=form.cleaned_data["password"],
            )
        if user is None:
            raise NotAuthenticated("Invalid credentials")
        login(request, user)
        return success_response(serialize_account(user))


class MeView(ApiView):
    """Return the logged-in user and set the CSRF cookie for later writes."""

    public_methods = ()

    @method_decorator(ensure_csrf_cookie)
    def get(self, request):
        return success_response(serialize_account(request.user))
