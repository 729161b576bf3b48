from datetime import date
from typing import Iterable
from birthday_display.models.person_schemas import Person
from birthday_display.models.view_schemas import BirthdayEntry, ImageStatus, ViewState
from birthday_display.services.birthday_service import BirthdayService
import logging

logger = logging.getLogger(__name__)

class BirthdayViewModel:
    """
    State behind the birthday window. Only the UI thread touches it.
        - update_day filters the persons and returns the image urls that still have to be fetched
        - apply_image stores a fetch result, None meaning the fetch failed
    """
    def __init__(self, persons: Iterable[Person], birthday_service: BirthdayService):
        self.persons = tuple(persons)
        self.birthday_service = birthday_service
        self.state = ViewState.LOADING
        self.today: date | None = None
        self.matches: list[Person] = []
        self._requested: set[str] = set()
        self._images: dict[str, bytes | None] = {}

    def update_day(self, today: date) -> list[str]:
        self.today = today
        self.matches = self.birthday_service.birthdays_today(self.persons, today)
        logger.info(f"{len(self.matches)} birthdays on {today.isoformat()}")

        # several persons may share one url, it is fetched once
        new_urls = []
        for person in self.matches:
            url = person.image_url
            if url and url not in self._requested:
                self._requested.add(url)
                new_urls.append(url)

        self._update_state()
        return new_urls

    def apply_image(self, url: str, data: bytes | None) -> bool:
        """Returns True when the result changed what is displayed"""
        if url not in self._requested or url in self._images:
            return False
        self._images[url] = data
        self._update_state()
        return True

    def pending_urls(self) -> set[str]:
        """Image urls of the current matches without a result yet"""
        return {
            person.image_url for person in self.matches
            if person.image_url and person.image_url not in self._images
        }

    def entries(self) -> list[BirthdayEntry]:
        return [
            BirthdayEntry(
                person=person,
                greeting=self.birthday_service.greeting(person, self.today),
                image_status=self._image_status(person),
                image_data=self._images.get(person.image_url) if person.image_url else None,
            )
            for person in self.matches
        ]

    # helper: image status of one person
    def _image_status(self, person: Person) -> ImageStatus:
        if not person.image_url:
            return ImageStatus.NONE
        if person.image_url not in self._images:
            return ImageStatus.PENDING
        if self._images[person.image_url] is None:
            return ImageStatus.FAILED
        return ImageStatus.LOADED

    def _update_state(self):
        # Ready is terminal
        if self.state is ViewState.LOADING and self.today is not None and not self.pending_urls():
            self.state = ViewState.READY
            logger.debug("Birthday view is ready")
