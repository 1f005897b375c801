from flask import Blueprint, request

from chaplog.services.statistics_service import StatisticsService
from chaplog.utils.auth import get_current_user_id, jwt_required
from chaplog.utils.errors import ValidationError
from chaplog.utils.responses import success_response

statistics_routes = Blueprint('statistics', __name__)
statistics_service = StatisticsService()

MIN_YEAR = 2000


def _validate_year(year):
    max_year = statistics_service.current_year() + 1
    if year < MIN_YEAR or year > max_year:
        raise ValidationError("Invalid year",
                              [{"field": "year", "message": f"year must be between {MIN_YEAR} and {max_year}"}])


@statistics_routes.route('/summary', methods=['GET'])
@jwt_required
def get_summary():
    return success_response(statistics_service.get_summary(get_current_user_id()))


@statistics_routes.route('/monthly/<int:year>', methods=['GET'])
@jwt_required
def get_monthly(year):
    _validate_year(year)
    return success_response(statistics_service.get_monthly_statistics(get_current_user_id(), year))


@statistics_routes.route('/genres', methods=['GET'])
@jwt_required
def get_genres():
    return success_response(statistics_service.get_genre_statistics(get_current_user_id()))


@statistics_routes.route('/activities', methods=['GET'])
@jwt_required
def get_activities():
    try:
        limit = int(request.args.get('limit', 20))
    except ValueError:
        raise ValidationError("limit must be an integer")
    if limit < 1 or limit > 100:
        raise ValidationError("Invalid limit", [{"field": "limit", "message": "limit must be between 1 and 100"}])

    return success_response(statistics_service.get_recent_activities(get_current_user_id(), limit))


@statistics_routes.route('/daily-heatmap/<int:year>/<int:month>', methods=['GET'])
@jwt_required
def get_daily_heatmap(year, month):
    _validate_year(year)
    if month < 1 or month > 12:
        raise ValidationError("Invalid month", [{"field": "month", "message": "month must be between 1 and 12"}])

    return success_response(statistics_service.get_daily_heatmap(get_current_user_id(), year, month))
