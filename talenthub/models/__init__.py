from talenthub.models.user import User, UserType
from talenthub.models.vacancy import Vacancy, VacancyStatus
from talenthub.models.application import VacancyApplication, ApplicationStatus
from talenthub.models.notification import Notification
