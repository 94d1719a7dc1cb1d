from enum import Enum


class AttendeeType(Enum):
    ADULT = "adult"
    MINOR = "minor"
