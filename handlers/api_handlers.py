"""
API Route Handlers for the lobby relay server.

Liveness probes and a read-only statistics view. No lobby state is
changed over HTTP.
"""

import logging
from flask import jsonify

from utils.constants import SERVER_VERSION

logger = logging.getLogger(__name__)


def register_api_handlers(app, dispatcher):
    """
    Register all API route handlers.

    Args:
        app: Flask application instance
        dispatcher: Event dispatcher owning lobby state
    """

    @app.route('/')
    def index():
        """Basic health check for Render."""
        return 'Lobby Server is Running!'

    @app.route('/api/health')
    def health_check():
        """Health check endpoint."""
        return jsonify({
            'status': 'healthy',
            'message': 'Lobby server is running',
            'version': SERVER_VERSION
        })

    @app.route('/api/stats')
    def get_stats():
        """Lobby and connection statistics."""
        try:
            lobby_stats = dispatcher.lobby_manager.get_lobby_stats()
            connection_stats = dispatcher.connection_manager.get_connection_stats()
            return jsonify({
                'active_lobbies': lobby_stats['active_lobbies'],
                'total_players': lobby_stats['total_players'],
                'bound_connections': connection_stats['bound_connections'],
                'lobbies': lobby_stats['lobbies']
            })

        except Exception as e:
            logger.error(f"Error getting statistics: {e}")
            return jsonify({'error': 'Failed to get statistics'}), 500

    # Error handlers
    @app.errorhandler(404)
    def not_found(error):
        """Handle 404 errors."""
        return jsonify({'error': 'Not found'}), 404

    @app.errorhandler(500)
    def internal_error(error):
        """Handle 500 errors."""
        return jsonify({'error': 'Internal server error'}), 500

    logger.info("API handlers registered successfully")
