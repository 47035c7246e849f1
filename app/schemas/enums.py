from enum import Enum

class ProfileMode(str, Enum):
    pro = "pro"
    social = "social"
    private = "private"

class NearbyStatus(str, Enum):
    nearby = "nearby"
    recent = "recent"
