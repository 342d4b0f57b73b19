import eventlet
eventlet.monkey_patch()

import os

from fitcoach import create_app
from fitcoach.extensions import socketio

app = create_app()

if __name__ == '__main__':
    socketio.run(app, host=os.getenv('HOST', '0.0.0.0'), port=int(os.getenv('PORT', 4000)), debug=app.config.get('DEBUG', False))
