"""Exceptions for use in Swiss Core"""

# Swiss Core
# Copyright (C) 2025  Swiss Core developers
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU General Public License for more details.
#
# You should have received a copy of the GNU General Public License
# along with this program.  If not, see <http://www.gnu.org/licenses/>.


# ========== Base Exception ==========


class SwissCoreException(Exception):
    """Base exception for all Swiss Core errors.

    Every custom exception in the package inherits from this class, so callers
    can catch all engine-specific errors with a single except clause.
    """

    pass


# ========== Pairing Exceptions ==========


class PairingException(SwissCoreException):
    """Base exception for pairing-related errors."""

    pass


class InvalidInputException(PairingException):
    """Raised when a pairing request is malformed.

    Examples are duplicate competitor ids, negative scores, or an accelerated
    round requested without the total number of rounds.
    """

    pass


class NoPairingAvailableException(PairingException):
    """Raised when no valid pairing can be generated."""

    pass


# ========== Tournament Exceptions ==========


class TournamentException(SwissCoreException):
    """Base exception for tournament-related errors."""

    pass


class TournamentStateException(TournamentException):
    """Raised when tournament is in an invalid state for the requested operation."""

    pass


class RoundNotFoundException(TournamentException):
    """Raised when a requested round does not exist."""

    pass


class DuplicateCompetitorException(TournamentException):
    """Raised when attempting to add a competitor that already exists."""

    pass


class CompetitorNotFoundException(TournamentException):
    """Raised when a requested competitor cannot be found."""

    pass


# ========== Result Exceptions ==========


class ResultException(SwissCoreException):
    """Base exception for result recording errors."""

    pass


class InvalidResultException(ResultException):
    """Raised when a result is invalid (unknown result string, bye board, ...)."""

    pass


# ========== Configuration Exceptions ==========


class ConfigurationException(SwissCoreException):
    """Base exception for configuration errors."""

    pass


class InvalidConfigurationException(ConfigurationException):
    """Raised when configuration values are invalid."""

    pass
