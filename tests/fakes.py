# tests/fakes.py


class FakeBroadcaster:
    """
    Records what the task service publishes instead of touching a channel layer.
    """

    def __init__(self):
        self.published = []

    def publish(self, log_entry=None):
        self.published.append(log_entry)
