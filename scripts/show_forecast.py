"""
Print current weather and the forecast table for a city.
Usage: python show_forecast.py [city]

Without a city the saved hometown is used (preferences blob when
STORAGE_ACCOUNT_NAME / AZURE_STORAGE_CONNECTION_STRING is set, otherwise the
HOMETOWN and WEATHER_API_KEY environment variables).
"""
import logging
import sys

from hometownweather import ForecastView, WeatherSettings, build_presenter, open_preferences


def main():
    logging.basicConfig(level=logging.INFO, format='%(asctime)s %(levelname)s %(name)s: %(message)s')
    settings = WeatherSettings.from_env()
    prefs = open_preferences(settings=settings)
    presenter = build_presenter(settings)
    view = ForecastView(presenter, prefs)
    try:
        pending = view.on_load()
        if pending is not None:
            pending.result()
        city = sys.argv[1] if len(sys.argv) > 1 else view.hometown
        if len(sys.argv) > 1:
            view.on_query_changed(city).result()
        if city and view.api_key:
            presenter.load_weather(city, view.api_key).result()
        weather = presenter.current_weather.value
        if weather is not None:
            print(f"{weather.city}: {weather.temperature} ({settings.units}), "
                  f"humidity {weather.humidity}%, wind {weather.wind_speed}")
            if presenter.icon_url.value:
                print(f"Icon: {presenter.icon_url.value}")
    finally:
        presenter.close()
        presenter.client.close()
    print(view.render())


if __name__ == "__main__":
    main()
