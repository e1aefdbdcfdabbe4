"""
Customer model.
"""
from ..extensions import db
from ..utils.time_utils import utcnow


class Customer(db.Model):
    """
    Loyalty program customer.

    Customers are never physically removed: deletion flips ``is_deleted``
    and the points ledger keeps its history. Customer-facing reads go
    through ``CustomerStore.get_active`` / ``list_active``.
    """
    __tablename__ = 'customers'

    customer_id = db.Column(db.String(64), primary_key=True)
    name = db.Column(db.String(255), nullable=False)

    # Running balance, kept in step with points_ledger by AccountingService
    total_points = db.Column(db.Integer, nullable=False, default=0)

    # Soft delete marker
    is_deleted = db.Column(db.Boolean, nullable=False, default=False, index=True)

    # Timestamps
    created_at = db.Column(db.DateTime, default=utcnow)
    updated_at = db.Column(db.DateTime, default=utcnow, onupdate=utcnow)

    # Optimistic lock for read-modify-write on total_points
    version_id = db.Column(db.Integer, nullable=False, default=1)
    __mapper_args__ = {'version_id_col': version_id}

    def __repr__(self):
        return f'<Customer {self.customer_id}: {self.total_points} pts>'

    def to_dict(self):
        return {
            'customerId': self.customer_id,
            'name': self.name,
            'totalPoints': self.total_points,
            'isDeleted': bool(self.is_deleted)
        }
