from ponggou.services.tournament import TournamentListener

NAMESPACE = '/ws'


class SocketIONotifier(TournamentListener):
    """Broadcasts tournament events to every client on the /ws namespace."""

    def __init__(self, socketio, namespace: str = NAMESPACE):
        self.socketio = socketio
        self.namespace = namespace

    def on_state_changed(self, state):
        self.socketio.emit('state_update', state, namespace=self.namespace)

    def on_notify(self, message, severity):
        self.socketio.emit('notify', {'message': message, 'severity': severity}, namespace=self.namespace)

    def on_round_decided(self, title, detail):
        self.socketio.emit('round_decided', {'title': title, 'detail': detail}, namespace=self.namespace)
