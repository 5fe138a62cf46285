def validate_time_window(start_time, end_time):
    if start_time is not None and end_time is not None and end_time <= start_time:
        raise ValueError("end_time must be later than start_time")
    return end_time


def validate_not_blank(value):
    if value is None or not value.strip():
        raise ValueError("must not be empty")
    return value.strip()
