from .user import User
from .entry import Entry, ActivityCategory
