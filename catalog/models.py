# catalog/models.py
# Import every model so relationship strings resolve and metadata is complete.

from catalog.modules.media.models import CourseVideo, CourseDocument, CourseAudio, CourseImage
from catalog.modules.courses.models import Course, CourseSection, CourseChapter, CourseStatus
from catalog.modules.categories.models import Category, Subcategory
from catalog.modules.users.models import User, CreatorProfile, MaritalStatus
from catalog.modules.geo.models import Country, State, CityDistrict, Town

__all__ = [
    "CourseVideo",
    "CourseDocument",
    "CourseAudio",
    "CourseImage",
    "Course",
    "CourseSection",
    "CourseChapter",
    "CourseStatus",
    "Category",
    "Subcategory",
    "User",
    "CreatorProfile",
    "MaritalStatus",
    "Country",
    "State",
    "CityDistrict",
    "Town",
]
