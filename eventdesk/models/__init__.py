from eventdesk.models.event import Event
from eventdesk.models.registration import Registration
from eventdesk.models.enums import AttendeeType
