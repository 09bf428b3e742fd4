"""
Flask API server for the Shonan surf forecast.

Exposes endpoints:
- GET /forecast - Per-spot forecast (synthetic or live)
- GET /spots - Spot registry
- GET /feed/status - Forecast feed connectivity check
- GET /health - Health check

Data Sources:
- Wave/wind text: Japan Meteorological Agency area forecast (Kanagawa)
  Citation: Japan Meteorological Agency, https://www.jma.go.jp/
"""

import logging
import os
from datetime import date, datetime, timedelta
from logging.handlers import RotatingFileHandler

import numpy as np
from flask import Flask, jsonify, request
from werkzeug.exceptions import HTTPException

from config import production
from surfcast.data_sources import feed
from surfcast.surf_model import board_recommendations, forecast, recommendations, spots

is_production = production.FLASK_ENV == 'production'

# Configure logging
if is_production:
    # Production logging - log to file
    production.ensure_directories()

    # Use RotatingFileHandler for log rotation (max 10MB, keep 5 backups)
    file_handler = RotatingFileHandler(
        production.LOG_FILE,
        maxBytes=10*1024*1024,  # 10MB
        backupCount=5
    )
    file_handler.setLevel(production.LOG_LEVEL)
    file_handler.setFormatter(logging.Formatter('%(asctime)s %(levelname)s %(name)s %(message)s'))

    console_handler = logging.StreamHandler()
    console_handler.setLevel(production.LOG_LEVEL)
    console_handler.setFormatter(logging.Formatter('%(asctime)s %(levelname)s %(name)s %(message)s'))

    logging.basicConfig(
        level=production.LOG_LEVEL,
        handlers=[file_handler, console_handler]
    )
else:
    # Development logging
    logging.basicConfig(level=production.LOG_LEVEL)

logger = logging.getLogger(__name__)

app = Flask(__name__)
app.config['DEBUG'] = production.DEBUG

MAX_DAY_OFFSET = 6


def fetch_live_entries():
    """Fetch the feed and extract the configured area's slots."""
    payload = feed.fetch_feed()
    return feed.extract_area_series(payload)


refresher = forecast.ForecastRefresher(fetch_live_entries)


# Enable CORS for frontend
@app.after_request
def after_request(response):
    response.headers.add('Access-Control-Allow-Origin', production.ALLOWED_ORIGIN)
    response.headers.add('Access-Control-Allow-Headers', 'Content-Type,Authorization')
    response.headers.add('Access-Control-Allow-Methods', 'GET,OPTIONS')
    return response


def ensure_json_serializable(obj):
    """
    Recursively convert numpy and date types to JSON-friendly Python types.
    """
    if isinstance(obj, np.integer):
        return int(obj)
    elif isinstance(obj, np.floating):
        return float(obj)
    elif isinstance(obj, np.bool_):
        return bool(obj)
    elif isinstance(obj, np.ndarray):
        return obj.tolist()
    elif isinstance(obj, (datetime, date)):
        return obj.isoformat()
    elif isinstance(obj, dict):
        return {
            (key.isoformat() if isinstance(key, date) else key): ensure_json_serializable(value)
            for key, value in obj.items()
        }
    elif isinstance(obj, (list, tuple)):
        return [ensure_json_serializable(item) for item in obj]
    else:
        return obj


def load_catalog():
    """Load the board catalog, treating a broken file as empty."""
    try:
        return board_recommendations.load_catalog(production.EQUIPMENT_CATALOG_PATH)
    except (OSError, ValueError) as e:
        logger.warning(f"Failed to load equipment catalog: {e}. Recommendations disabled.")
        return []


def _error(error, message, status):
    return jsonify({
        'error': error,
        'message': message,
        'timestamp': datetime.now().isoformat()
    }), status


def _int_arg(name, default, low=None, high=None):
    """Parse an optional integer query parameter; raises ValueError."""
    value = request.args.get(name)
    if value is None or value == '':
        return default
    value = int(value)
    if low is not None and value < low:
        raise ValueError(f"{name} must be at least {low}")
    if high is not None and value > high:
        raise ValueError(f"{name} must be at most {high}")
    return value


def local_now(slots):
    """Current time in the slots' own timezone, so day and hour compare like for like."""
    tz = slots[0].timestamp.tzinfo if slots else None
    return datetime.now(tz)


def build_forecast_response(spot, mode, slots, catalog, selected_day=None, now=None):
    """Assemble the JSON body for a forecast: grouped slots, summary, best session."""
    grouped = forecast.group_by_date(slots)
    days = {}
    for day, day_slots in grouped.items():
        entries = []
        for slot in day_slots:
            entry = slot.to_dict()
            entry['board'] = board_recommendations.recommend_equipment(slot.assessment, catalog)
            entries.append(entry)
        days[day] = entries

    best_day = selected_day or (next(iter(grouped)) if grouped else None)
    best = None
    if best_day is not None:
        best = recommendations.best_session(grouped.get(best_day, []), catalog, now=now)

    summary = forecast.daily_summary(slots).reset_index().to_dict(orient='records')

    return ensure_json_serializable({
        'location': spot.name,
        'spot': {
            'id': spot.id,
            'lat': spot.lat,
            'lon': spot.lon,
            'terrain': spot.terrain,
        },
        'mode': mode,
        'forecast': days,
        'daily_summary': summary,
        'best_session': best,
        'timestamp': datetime.now().isoformat()
    })


@app.route('/', methods=['GET'])
def root():
    """Root endpoint - lists the API."""
    return jsonify({
        'message': 'Shonan Surf Forecast API',
        'endpoints': {
            'health': '/health',
            'spots': '/spots',
            'forecast': '/forecast?spot=<id>&mode=synthetic|live&day=<0-6>&seed=<int>',
            'feed_status': '/feed/status'
        }
    }), 200


@app.route('/health', methods=['GET'])
def health():
    """Health check endpoint."""
    return jsonify({
        'status': 'healthy',
        'timestamp': datetime.now().isoformat()
    })


@app.route('/spots', methods=['GET'])
def list_spots():
    """Spot registry."""
    return jsonify({
        'default': spots.DEFAULT_SPOT_ID,
        'spots': [
            {
                'id': spot.id,
                'name': spot.name,
                'lat': spot.lat,
                'lon': spot.lon,
                'terrain': spot.terrain,
                'offshore_wind': [spot.offshore_min, spot.offshore_max]
            }
            for spot in spots.SPOTS
        ]
    })


@app.route('/forecast', methods=['GET'])
def get_forecast():
    """
    Main forecast endpoint.

    Query parameters:
    - spot: spot id (default first spot)
    - mode: 'synthetic' (default) or 'live'
    - day: day offset 0-6 for synthetic mode (default 0 = today)
    - seed: integer seed for reproducible output

    Returns:
    --------
    JSON with slots grouped by date, daily summary and best session
    """
    spot_id = request.args.get('spot', spots.DEFAULT_SPOT_ID)
    mode = request.args.get('mode', 'synthetic')

    try:
        spot = spots.get_spot(spot_id)
    except KeyError:
        return _error('Unknown spot', f"No spot with id '{spot_id}'", 404)

    if mode not in ('synthetic', 'live'):
        return _error('Invalid mode parameter', "mode must be 'synthetic' or 'live'", 400)

    try:
        day_offset = _int_arg('day', 0, 0, MAX_DAY_OFFSET)
        seed = _int_arg('seed', None, 0)
    except ValueError as e:
        return _error('Invalid query parameter', str(e), 400)

    catalog = load_catalog()
    now = datetime.now()

    if mode == 'synthetic':
        start = datetime.combine(now.date() + timedelta(days=day_offset), datetime.min.time())
        logger.info(f"Synthesizing forecast for {spot.id} on {start.date()}")
        slots = forecast.synthetic_forecast(spot, start, np.random.default_rng(seed))
        slots = forecast.day_window(slots, start.date())
        body = build_forecast_response(
            spot, mode, slots, catalog,
            selected_day=start.date(),
            now=now if day_offset == 0 else None
        )
        return jsonify(body)

    logger.info(f"Fetching live forecast for {spot.id}")
    try:
        slots, committed = refresher.refresh(spot, seed)
    except feed.FeedError as e:
        logger.error(f"Forecast feed error: {e}")
        return _error(e.kind, str(e), 502)

    if not committed:
        logger.info(f"Live forecast for {spot.id} superseded by a newer request")
    body = build_forecast_response(spot, mode, slots, catalog, now=local_now(slots))
    body['superseded'] = not committed
    return jsonify(body)


@app.route('/feed/status', methods=['GET'])
def feed_status():
    """Forecast feed connectivity check."""
    try:
        payload = feed.fetch_feed()
        summary = feed.describe_feed(payload)
    except feed.FeedError as e:
        logger.warning(f"Feed check failed: {e}")
        return jsonify({
            'status': 'error',
            'error': e.kind,
            'message': str(e),
            'timestamp': datetime.now().isoformat()
        }), 502

    return jsonify({
        'status': 'success',
        'feed': summary,
        'timestamp': datetime.now().isoformat()
    })


# Production error handlers
@app.errorhandler(404)
def not_found(error):
    """Handle 404 errors."""
    logger.warning(f"404 error: {request.url}")
    return _error('Not found', 'The requested resource was not found.', 404)


@app.errorhandler(500)
def internal_error(error):
    """Handle 500 errors."""
    logger.error(f"500 error: {error}", exc_info=True)
    if is_production:
        # Don't expose error details in production
        return _error('Internal server error', 'An error occurred processing your request.', 500)
    return _error(str(error), 'An error occurred processing your request.', 500)


@app.errorhandler(Exception)
def handle_exception(e):
    """Handle all unhandled exceptions."""
    if isinstance(e, HTTPException):
        return e
    logger.error(f"Unhandled exception: {e}", exc_info=True)
    if is_production:
        return _error('Internal server error', 'An unexpected error occurred.', 500)
    return jsonify({
        'error': str(e),
        'timestamp': datetime.now().isoformat()
    }), 500


if __name__ == '__main__':
    port = int(os.environ.get('PORT', '5002'))
    print(f"* API will be available at: http://localhost:{port}")
    app.run(debug=production.DEBUG, use_reloader=False, host='0.0.0.0', port=port)
