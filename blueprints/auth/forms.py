"""
Authentication forms using Flask-WTF.
Validates login and registration JSON bodies.
"""

from flask_wtf import FlaskForm
from wtforms import StringField, PasswordField, BooleanField
from wtforms.validators import DataRequired, Email, Length, Optional, ValidationError

from utils.validators import validate_password as check_password_strength


class LoginForm(FlaskForm):
    """Login form with email and password."""

    email = StringField('Email', validators=[
        DataRequired(message='Email is required')
    ])

    password = PasswordField('Password', validators=[
        DataRequired(message='Password is required')
    ])

    remember_me = BooleanField('Remember me')


class RegisterForm(FlaskForm):
    """Account registration form."""

    email = StringField('Email', validators=[
        DataRequired(message='Email is required'),
        Email(message='Invalid email format'),
        Length(max=254)
    ])

    password = PasswordField('Password', validators=[
        DataRequired(message='Password is required')
    ])

    first_name = StringField('First name', validators=[
        DataRequired(message='First name is required'),
        Length(max=100)
    ])

    last_name = StringField('Last name', validators=[
        Optional(),
        Length(max=100)
    ])

    def validate_password(self, field):
        is_valid, error = check_password_strength(field.data, min_length=8)
        if not is_valid:
            raise ValidationError(error)
