"""
Marketplace forms using Flask-WTF.
Validate reservation and listing JSON bodies before they reach the services.
"""

import math

from flask_wtf import FlaskForm
from wtforms import BooleanField, FloatField, IntegerField, StringField, TextAreaField
from wtforms.validators import DataRequired, InputRequired, Length, NumberRange, Optional, ValidationError

from utils.validators import parse_iso_date


def _iso_date(form, field):
    """Field validator: value must parse as an ISO date; stores the date on field.date."""
    if not field.data:
        field.date = None
        return
    try:
        field.date = parse_iso_date(field.data)
    except ValueError:
        raise ValidationError(f'{field.label.text} must be an ISO date (YYYY-MM-DD)')


def _finite(form, field):
    """Field validator: rejects NaN and infinity."""
    if field.data is not None and not math.isfinite(field.data):
        raise ValidationError(f'{field.label.text} must be a finite number')


def _positive(form, field):
    """Field validator: finite number strictly greater than zero."""
    _finite(form, field)
    if field.data is not None and field.data <= 0:
        raise ValidationError(f'{field.label.text} must be positive')


class ReservationForm(FlaskForm):
    """Reservation request from a client."""

    listing_id = IntegerField('Listing', validators=[
        InputRequired(message='listing_id is required')
    ])

    space_requested = FloatField('Space', validators=[
        InputRequired(message='space_requested is required'),
        _positive
    ])

    start_date = StringField('Start date', validators=[
        DataRequired(message='start_date is required'), _iso_date
    ])

    end_date = StringField('End date', validators=[
        DataRequired(message='end_date is required'), _iso_date
    ])

    message = TextAreaField('Message', validators=[
        Optional(),
        Length(max=2000)
    ])

    def validate_end_date(self, field):
        start = getattr(self.start_date, 'date', None)
        end = getattr(field, 'date', None)
        if start and end and end <= start:
            raise ValidationError('End date must be after start date')


class ListingForm(FlaskForm):
    """Full listing body for creation."""

    title = StringField('Title', validators=[
        DataRequired(message='Title is required'),
        Length(max=200)
    ])

    description = TextAreaField('Description', validators=[
        Optional(),
        Length(max=5000)
    ])

    price = FloatField('Price', validators=[
        InputRequired(message='Price is required'),
        _positive
    ])

    space_available = FloatField('Space available', validators=[
        InputRequired(message='Space available is required'),
        _finite,
        NumberRange(min=0, message='Space available cannot be negative')
    ])

    latitude = FloatField('Latitude', validators=[
        Optional(),
        _finite,
        NumberRange(min=-90, max=90)
    ])

    longitude = FloatField('Longitude', validators=[
        Optional(),
        _finite,
        NumberRange(min=-180, max=180)
    ])

    available_from = StringField('Available from', validators=[Optional(), _iso_date])

    available_to = StringField('Available to', validators=[Optional(), _iso_date])

    is_active = BooleanField('Active', default=True)

    def listing_data(self, present: set = None) -> dict:
        """
        Cleaned values ready for ListingService.

        Args:
            present: Only include these keys (partial updates)
        """
        data = {
            'title': self.title.data,
            'description': self.description.data or '',
            'price': self.price.data,
            'space_available': self.space_available.data,
            'latitude': self.latitude.data,
            'longitude': self.longitude.data,
            'available_from': getattr(self.available_from, 'date', None),
            'available_to': getattr(self.available_to, 'date', None),
            'is_active': self.is_active.data if self.is_active.raw_data else True,
        }
        if present is not None:
            data = {k: v for k, v in data.items() if k in present}
        return data


class ListingUpdateForm(ListingForm):
    """Partial listing body: every field optional."""

    title = StringField('Title', validators=[Optional(), Length(max=200)])

    price = FloatField('Price', validators=[
        Optional(),
        _positive
    ])

    space_available = FloatField('Space available', validators=[
        Optional(),
        _finite,
        NumberRange(min=0, message='Space available cannot be negative')
    ])
