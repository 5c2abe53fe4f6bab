from typing import List


class MockNotifier:
    def __init__(self):
        self.messages: List[str] = []

    def send(self, message: str):
        self.messages.append(message)
