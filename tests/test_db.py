from movie_api.db import PROBE_TIMEOUT_MS, DatabaseSettings, check_connection


class RecordingClient:
    def __init__(self, connection_string, **kwargs):
        self.connection_string = connection_string
        self.kwargs = kwargs
        self.closed = False
        created.append(self)

    def list_database_names(self):
        return ["admin", "gbs"]

    def close(self):
        self.closed = True


created = []


def test_check_connection_uses_fresh_client_and_closes_it():
    created.clear()
    names = check_connection(DatabaseSettings("mongodb://db.example:27017"), RecordingClient)

    assert names == ["admin", "gbs"]
    [probe] = created
    assert probe.connection_string == "mongodb://db.example:27017"
    assert probe.kwargs == {"serverSelectionTimeoutMS": PROBE_TIMEOUT_MS}
    assert probe.closed
