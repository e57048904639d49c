"""
Route modules initialization.
"""
from app.routes.health import create_health_routes
from app.routes.coach import create_coach_routes
from app.routes.phrases import create_phrase_routes
from app.routes.sessions import create_session_routes
from app.routes.metrics import create_metrics_routes

__all__ = [
    'create_health_routes',
    'create_coach_routes',
    'create_phrase_routes',
    'create_session_routes',
    'create_metrics_routes',
]
