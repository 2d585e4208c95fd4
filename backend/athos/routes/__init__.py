from .adaptive import router as adaptive_router
from .content import router as content_router
from .progress import router as progress_router
from .quizzes import router as quizzes_router
from .users import router as users_router

# Re-export routers with consistent naming
adaptive = adaptive_router
content = content_router
progress = progress_router
quizzes = quizzes_router
users = users_router
