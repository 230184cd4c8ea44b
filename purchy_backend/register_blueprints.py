"""
Centralized Blueprint Registration
All blueprints MUST be registered inside register_all_blueprints(app)
"""

def register_all_blueprints(app):

    # Root
    from purchy_backend.routes.root.root_routes import root_bp
    app.register_blueprint(root_bp)

    # Auth
    from purchy_backend.routes.auth.auth_routes import auth_bp
    app.register_blueprint(auth_bp)

    # Purchies
    from purchy_backend.routes.purchy.purchy_routes import purchy_bp
    app.register_blueprint(purchy_bp)

    app.logger.info("All blueprints registered")
