from flask import Flask

from .health_routes import health_bp
from .insight_routes import insight_bp
from .static_routes import static_bp

__all__ = ["register_routes"]


def register_routes(app: Flask) -> None:
    app.register_blueprint(health_bp)
    app.register_blueprint(insight_bp)
    app.register_blueprint(static_bp)
