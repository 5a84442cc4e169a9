from airtraffic import plane_reports as reports


def rows(frame):
    return [tuple(row) for row in frame.itertuples(index=False)]


def test_total_planes_by_manufacturer(repository):
    frame = reports.report_total_planes_by_manufacturer(repository)
    assert rows(frame) == [('BOEING', 2), ('AIRBUS INDUSTRIE', 1), ('EMBRAER', 1)]


def test_total_planes_by_year_skips_unknown_years(repository):
    frame = reports.report_total_planes_by_year(repository)
    assert rows(frame) == [(2004, 1), (2001, 1), (1998, 1)]


def test_total_planes_by_type(repository):
    aircraft = reports.report_total_planes_by_aircraft_type(repository)
    engines = reports.report_total_planes_by_engine_type(repository)
    assert rows(aircraft) == [('Fixed Wing Multi-Engine', 4)]
    assert rows(engines) == [('Turbo-Fan', 3), ('Turbo-Jet', 1)]


def test_planes_with_most_cancellations(repository):
    frame = reports.report_planes_with_most_cancellations(repository, 2008)
    assert rows(frame) == [('N404AA', 1)]


def test_most_flights_by_plane(repository):
    frame = reports.report_most_flights_by_plane(repository, 2008)
    assert list(frame.columns) == ['tail_number', 'manufacturer', 'model_number', 'flights']
    assert [(row.tail_number, row.flights) for row in frame.itertuples()] == [
        ('N101AA', 2), ('N202UA', 2), ('N303WN', 1),
    ]


def test_most_flights_by_plane_model(repository):
    frame = reports.report_most_flights_by_plane_model(repository, 2008)
    assert [(row.manufacturer, row.model_number, row.flights) for row in frame.itertuples()] == [
        ('AIRBUS INDUSTRIE', 'A320-232', 2),
        ('BOEING', '737-823', 2),
        ('BOEING', '737-7H4', 1),
    ]
    assert frame['daily_average'].iloc[0] == 2 / 365


def test_total_flights_by_plane_manufacturer(repository):
    frame = reports.report_total_flights_by_plane_manufacturer(repository, 2008)
    assert rows(frame) == [('BOEING', 3), ('AIRBUS INDUSTRIE', 2)]


def test_total_flights_by_plane_age_range(repository):
    frame = reports.report_total_flights_by_plane_age_range(repository, 2008)
    assert rows(frame) == [('6-10', 4), ('Total', 4)]


def test_total_flights_by_plane_type(repository):
    aircraft = reports.report_total_flights_by_aircraft_type(repository, 2008)
    engines = reports.report_total_flights_by_engine_type(repository, 2008)
    assert rows(aircraft) == [('Fixed Wing Multi-Engine', 5)]
    assert rows(engines) == [('Turbo-Fan', 4), ('Turbo-Jet', 1)]
