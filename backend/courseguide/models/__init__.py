from courseguide.models.building import Building, Campus  # noqa: F401
from courseguide.models.course import (  # noqa: F401
    Course,
    CourseFaculty,
    CourseLocation,
    CourseNote,
    CourseNoteType,
    CourseRoom,
    CourseState,
)
from courseguide.models.faculty import Faculty  # noqa: F401
from courseguide.models.guideline import Guideline, GuidelineDay, GuidelineTime  # noqa: F401
from courseguide.models.schedule import Schedule, ScheduleRevision  # noqa: F401
