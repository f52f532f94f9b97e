"""Reservation Service Interfaces"""

from src.service.reservation.app.interface.i_user_rights_query import IUserRightsQuery


__all__ = ['IUserRightsQuery']
