"""
Points ledger model.
"""
from enum import Enum
from ..extensions import db
from ..utils.time_utils import utcnow


class ChangeType(str, Enum):
    """Kind of accounting event recorded in the ledger."""
    EARN = 'Earn'
    REDEEM = 'Redeem'


class LedgerEntry(db.Model):
    """
    Append-only record of every points change.

    One row per accounting event:
    - Earn: positive point_change from a purchase
    - Redeem: negative point_change from a reward redemption

    Rows are never updated. customer_id is stored by value (no foreign
    key) so history survives a soft delete.
    """
    __tablename__ = 'points_ledger'
    __table_args__ = (
        db.Index('ix_points_ledger_customer_type_ts', 'customer_id', 'change_type', 'timestamp'),
    )

    id = db.Column(db.Integer, primary_key=True, autoincrement=True)
    customer_id = db.Column(db.String(64), nullable=False, index=True)

    # Transaction details
    change_type = db.Column(db.String(16), nullable=False)  # Earn, Redeem
    point_change = db.Column(db.Integer, nullable=False)  # Positive for earn, negative for redeem
    timestamp = db.Column(db.DateTime, nullable=False, default=utcnow)

    # Correlates to the originating purchase/redemption request
    transaction_id = db.Column(db.String(100), nullable=False, unique=True)

    # Reserved for promotional attribution; recorded, never computed
    campaign_applied = db.Column(db.Boolean, nullable=False, default=False)

    def __repr__(self):
        return f'<LedgerEntry {self.id}: {self.change_type} {self.point_change} for {self.customer_id}>'

    def to_dict(self):
        return {
            'id': self.id,
            'customerId': self.customer_id,
            'changeType': self.change_type,
            'pointChange': self.point_change,
            'timestamp': self.timestamp.isoformat() if self.timestamp else None,
            'transactionId': self.transaction_id,
            'campaignApplied': bool(self.campaign_applied)
        }
