import uuid


def new_id():
    return str(uuid.uuid4())


def isoformat(value):
    return value.isoformat() if value else None
