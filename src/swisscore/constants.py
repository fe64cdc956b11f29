"""Constants used throughout Swiss Core."""

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

# Game outcome scores
WIN_SCORE = 1.0
DRAW_SCORE = 0.5
LOSS_SCORE = 0.0

# A bye is scored as a win
BYE_SCORE = WIN_SCORE

# Result strings (white score first)
RESULT_WHITE_WIN = "1-0"
RESULT_BLACK_WIN = "0-1"
RESULT_DRAW = "1/2-1/2"

# Tolerance used when comparing accumulated scores
SCORE_EPSILON = 0.01

# --- Pairing variants ---
VARIANT_STANDARD = "standard"
VARIANT_USCF = "uscf"
VARIANT_FIDE_DUTCH = "fide_dutch"
VARIANT_ACCELERATED = "accelerated"
PAIRING_SYSTEM_ROUND_ROBIN = "round_robin"

SWISS_VARIANTS = (
    VARIANT_STANDARD,
    VARIANT_USCF,
    VARIANT_FIDE_DUTCH,
    VARIANT_ACCELERATED,
)
PAIRING_SYSTEMS = SWISS_VARIANTS + (PAIRING_SYSTEM_ROUND_ROBIN,)

# Accelerated pairings: virtual point for the top half during the first rounds
ACCELERATION_BONUS = 1.0
MAX_ACCELERATED_ROUNDS = 2

FORCED_REPEAT_REASON = "no-repeat unsatisfiable"

# --- Solver bounds ---
# The cost weights below are derived from these so each tier dominates the
# sum of every lower tier over a whole round.
MAX_POOL_SIZE = 256
MAX_ROUNDS = 64
MAX_SEED_BIAS_WEIGHT = 10
DEFAULT_MAX_SEARCH_NODES = 50_000

# --- Cost weights ---
W_COLOR = 10
W_STREAK = 500

_MAX_PAIRS = MAX_POOL_SIZE // 2
# worst case color, streak and seed bias cost of a single pair
_LOW_TIER_PER_PAIR = (
    W_COLOR * 2 * MAX_ROUNDS + W_STREAK + MAX_SEED_BIAS_WEIGHT * MAX_POOL_SIZE
)
_MAX_LOW_TIER = _MAX_PAIRS * _LOW_TIER_PER_PAIR

# score gaps come in half points, so half a weight must beat the low tier
W_SCORE = 2 * (_MAX_LOW_TIER + 1)
# +1 for the acceleration bonus
_MAX_SCORE_TIER = _MAX_PAIRS * (MAX_ROUNDS + 1) * W_SCORE + _MAX_LOW_TIER

W_REPEAT = _MAX_SCORE_TIER + 1
W_CONSEC_REPEAT = _MAX_PAIRS * W_REPEAT + _MAX_SCORE_TIER + 1

# Logging configuration (environment variables)
LOG_LEVEL_ENV = "SWISSCORE_LOG_LEVEL"
LOG_FILE_ENV = "SWISSCORE_LOG_FILE"
