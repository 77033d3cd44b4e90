"""
Authentication routes: register, login, logout, current user.
Session-based authentication through Flask-Login, JSON in and out.
"""

import logging
import sqlite3

from flask import Blueprint
from flask_login import login_user, logout_user, login_required, current_user
from flask_wtf.csrf import generate_csrf

from blueprints.auth.forms import LoginForm, RegisterForm
from models.user import (
    User, create_user, get_user_by_email, get_user_by_id, update_last_login, check_password
)
from utils.api_response import api_success, api_error, bind_json_form, form_error
from utils.messages import MESSAGES
from utils.validators import sanitize_input

logger = logging.getLogger(__name__)

auth_bp = Blueprint('auth', __name__)


@auth_bp.route('/register', methods=['POST'])
def register():
    """Create an account and start a session."""
    form = bind_json_form(RegisterForm)
    if not form.validate():
        return form_error(form)

    if get_user_by_email(form.email.data):
        return api_error(MESSAGES['email_exists'], status=409, code='conflict')

    try:
        user_id = create_user(
            email=form.email.data,
            password=form.password.data,
            first_name=sanitize_input(form.first_name.data, 100),
            last_name=sanitize_input(form.last_name.data, 100),
        )
    except sqlite3.IntegrityError:
        return api_error(MESSAGES['email_exists'], status=409, code='conflict')

    user = User(get_user_by_id(user_id))
    login_user(user)
    logger.info('User %s registered', user_id)

    return api_success(data=user.to_dict(), message=MESSAGES['user_created'], status=201)


@auth_bp.route('/login', methods=['POST'])
def login():
    """Check credentials and start a session."""
    form = bind_json_form(LoginForm)
    if not form.validate():
        return form_error(form)

    user_dict = get_user_by_email(form.email.data.strip())

    # Check credentials
    if user_dict is None or not check_password(user_dict, form.password.data):
        return api_error(MESSAGES['invalid_credentials'], status=401, code='invalid_credentials')

    # Check if user is active
    if not user_dict.get('active'):
        return api_error(MESSAGES['account_disabled'], status=403, code='forbidden')

    user = User(user_dict)
    login_user(user, remember=form.remember_me.data)
    update_last_login(user.id)

    return api_success(
        data=user.to_dict(),
        message=MESSAGES['login_success'].format(name=user.full_name)
    )


@auth_bp.route('/logout', methods=['POST'])
@login_required
def logout():
    """End the current session."""
    logout_user()
    return api_success(message=MESSAGES['logout_success'])


@auth_bp.route('/me')
@login_required
def me():
    """Return the logged-in user."""
    return api_success(data=current_user.to_dict())


@auth_bp.route('/csrf-token')
def csrf_token():
    """Token for the X-CSRFToken header on state-changing requests."""
    return api_success(data={'csrf_token': generate_csrf()})
