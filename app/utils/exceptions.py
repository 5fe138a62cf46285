"""Business-rule and persistence errors raised by the services."""


class DomainError(Exception):
    def __init__(self, message: str, status_code: int = 400):
        self.message = message
        self.status_code = status_code
        super().__init__(message)


class ValidationError(DomainError):
    def __init__(self, message: str):
        super().__init__(message, 400)


class NotFoundError(DomainError):
    def __init__(self, message: str):
        super().__init__(message, 404)


class ClassroomNotFound(NotFoundError):
    def __init__(self, classroom_id: int):
        super().__init__(f"Classroom {classroom_id} not found")


class SeatNotFound(NotFoundError):
    def __init__(self, message: str = "Seat not found"):
        super().__init__(message)


class UserNotFound(NotFoundError):
    def __init__(self, message: str = "User not found"):
        super().__init__(message)


class ScheduleMismatch(DomainError):
    def __init__(self, message: str):
        super().__init__(message, 400)


class NoScheduledClass(ScheduleMismatch):
    def __init__(self, course_name: str, day_of_week: str):
        super().__init__(
            f"No scheduled class for {course_name} on {day_of_week} covering the requested time"
        )


class NoActiveClass(ScheduleMismatch):
    def __init__(self, message: str = "No class is currently in session in this classroom"):
        super().__init__(message)


class ConflictError(DomainError):
    def __init__(self, message: str):
        super().__init__(message, 400)


class SeatTaken(ConflictError):
    def __init__(self, seat_number: int):
        super().__init__(f"Seat {seat_number} already taken")


class DuplicateReservation(ConflictError):
    def __init__(self, email: str):
        super().__init__(f"{email} already holds a reserved seat")


class EmailAlreadyRegistered(ConflictError):
    def __init__(self):
        super().__init__("Email already registered")


class AuthenticationError(DomainError):
    def __init__(self, message: str = "Invalid credentials"):
        super().__init__(message, 401)


class PersistenceFailure(DomainError):
    def __init__(self, message: str = "Database error"):
        super().__init__(message, 500)
