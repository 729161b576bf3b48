from datetime import date
from typing import Iterable
from birthday_display.models.person_schemas import Person
from birthday_display.utils.util_functions import Util

class BirthdayService:
    """
    This service selects the persons having their birthday on a given day and builds their greeting.
    """

    # filter persons by day and month
    def birthdays_today(self, persons: Iterable[Person], today: date) -> list[Person]:
        """Matching persons in their original order"""
        return [person for person in persons if Util.is_birthday(person.birthday, today)]

    def greeting(self, person: Person, today: date) -> str:
        """
        Greeting shown above the portrait

        eg: "Ms. Jane Doe turns 34 today." or "Jane Doe has a birthday today." when the age is unknown
        """
        salutation = Util.salutation(person.gender)
        name = f"{salutation} {person.full_name}" if salutation else person.full_name

        age = Util.age_on(person.birthday, today)
        if age is None:
            return f"{name} has a birthday today."
        return f"{name} turns {age} today."
