from ponggou import db


class StoreEntry(db.Model):
    """One persisted tournament record (JSON text) per key."""
    __tablename__ = 'store_entry'
    key = db.Column(db.String(64), primary_key=True)
    value = db.Column(db.Text, nullable=False, default='null')
    updated_at = db.Column(db.DateTime, server_default=db.func.now(), onupdate=db.func.now())

    def to_dict(self):
        return {
            'key': self.key,
            'value': self.value,
        }
