from chaplog.db import db


class BaseRepository:
    """Query helpers shared by every entity repository."""

    model = None

    def get_by_id(self, entity_id):
        return db.session.get(self.model, entity_id)

    def create(self, entity):
        db.session.add(entity)
        db.session.commit()
        return entity

    def update(self, entity):
        db.session.commit()
        return entity

    def delete(self, entity):
        db.session.delete(entity)
        db.session.commit()

    def exists(self, *criteria):
        return db.session.query(self.model.query.filter(*criteria).exists()).scalar()

    def count(self, *criteria):
        return self.model.query.filter(*criteria).count()
