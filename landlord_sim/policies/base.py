# landlord_sim/policies/base.py
class BasePolicy:
    def __init__(self, capacity):
        self.cap = capacity
    def request(self, key: str, obj_size, cost) -> bool: ...
    def snapshot(self) -> tuple: ...
