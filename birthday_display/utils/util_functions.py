from datetime import date

MALE_GENDERS = ("m", "M")
FEMALE_GENDERS = ("f", "F", "w", "W")

class Util:

    @staticmethod
    def is_birthday(birthday: date, today: date) -> bool:
        """Only day and month are compared, the year never matters"""
        return birthday.day == today.day and birthday.month == today.month

    @staticmethod
    def age_on(birthday: date, today: date) -> int | None:
        """
        Age in completed years on the given day

        :param birthday: Date of birth
        :param today: Reference date

        Returns None when the birthday lies after the reference date.
        """
        if birthday > today:
            return None
        age = today.year - birthday.year
        if (today.month, today.day) < (birthday.month, birthday.day):
            age -= 1
        return age

    @staticmethod
    def salutation(gender: str) -> str:
        if gender in MALE_GENDERS:
            return "Mr."
        if gender in FEMALE_GENDERS:
            return "Ms."
        return ""
