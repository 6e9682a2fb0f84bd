# run_school_report.py
import pprint

from config.settings import settings
from config.logging import logger
from data_pipeline.load_datasets import (
    load_schools,
    load_pollution_data,
    load_weather_data,
    filter_weather_data
)
from data_pipeline.schools import search_schools, school_location
from app.services.record_filter import select_school_records
from app.services.site_resolver import find_nearest_monitoring_center
from app.services.pollution_summary import analyze_pollution_data
from app.services.weather_correlation import analyze_weather_correlation
from app.services.yearly_trends import analyze_yearly_trends
from app.services.dashboard_stats import (
    air_quality_assessment,
    average_pm25_category,
    describe_trend,
    median_pm,
    percentile_pm,
    summary_frame
)
from app.services.aqi_utils import aqi_category_label


def main(school_name=None, start_year=None, end_year=None):
    school_name = school_name if school_name is not None else settings.SCHOOL_NAME
    start_year = start_year or settings.START_YEAR
    end_year = end_year or settings.END_YEAR

    pp = pprint.PrettyPrinter(indent=2)

    schools = load_schools()
    matches = search_schools(schools, school_name)
    if matches.empty:
        print(f"No school matching '{school_name}' found!")
        return None

    school = matches.iloc[0]
    location = school_location(school)
    center = find_nearest_monitoring_center(location["latitude"], location["longitude"])

    pollution = load_pollution_data()
    weather = filter_weather_data(load_weather_data(), start_year, end_year)

    tier, records = select_school_records(pollution, location, start_year, end_year)
    analytics = analyze_pollution_data(records)
    correlation = analyze_weather_correlation(records, weather)
    trends = analyze_yearly_trends(records, start_year, end_year)

    logger.info(f"Report built for {school.get('School')} | tier={tier} | records={len(records)}")

    # ===============================
    # School & Monitoring Center
    # ===============================
    print("\n=== School ===")
    print(f"{school.get('School')} | {school.get('Street Address', '')}")
    print(f"Nearest center: {center['name']} | distance_km={center['distance']}")
    print(f"Filter tier: {tier} | records: {len(records)} | years: {start_year}-{end_year}")

    # ===============================
    # Pollution Summary
    # ===============================
    print("\n=== Pollution Summary ===")
    avg_category = average_pm25_category(analytics["average_pm25"])
    print(f"Average PM2.5: {analytics['average_pm25']:.1f} ({aqi_category_label(avg_category)})")
    print(f"Average PM10: {analytics['average_pm10']:.1f}")
    print(f"Median PM2.5: {median_pm(records):.1f} | 90th percentile: {percentile_pm(records):.1f}")
    print(summary_frame(analytics).to_string(index=False))
    pp.pprint(air_quality_assessment(analytics["days_in_categories"]))

    print("\n=== Highest Pollution Days ===")
    for day in analytics["highest_pollution_days"]:
        print(f"{day['date']}  PM2.5={day['pm25']:.1f}  PM10={day['pm10']:.1f}")

    # ===============================
    # Weather Correlation
    # ===============================
    print("\n=== Weather Correlation ===")
    print(f"Rainy days avg PM2.5: {correlation['rainy_days_avg_pm25']:.1f}")
    print(f"Dry days avg PM2.5: {correlation['non_rainy_days_avg_pm25']:.1f}")
    pp.pprint(correlation["weather_condition_stats"])

    # ===============================
    # Yearly Trends
    # ===============================
    print("\n=== Yearly Trends ===")
    pp.pprint(trends["yearly_averages"])
    print(describe_trend(trends["trend"])["message"])

    return {
        "tier": tier,
        "analytics": analytics,
        "correlation": correlation,
        "trends": trends
    }


if __name__ == "__main__":
    main()
