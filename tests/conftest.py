import pytest

from airtraffic.config import Config
from airtraffic.load import Repository

AIRPORTS = """\
"iata","airport","city","state","country","lat","long"
"ORD","Chicago O'Hare International","Chicago","IL","USA",41.979595,-87.90446417
"MDW","Chicago Midway","Chicago","IL","USA",41.78597222,-87.75242444
"LAX","Los Angeles International","Los Angeles","CA","USA",33.94253611,-118.4080744
"SFO","San Francisco International","San Francisco","CA","USA",37.61900194,-122.3748433
"JFK","John F Kennedy Intl","New York","NY","USA",40.63975111,-73.77892556
"""

CARRIERS = """\
Code,Description
"AA","American Airlines Inc."
"UA","United Air Lines Inc."
"WN","Southwest Airlines Co."
"""

PLANES = """\
tailnum,type,manufacturer,issue_date,model,status,aircraft_type,engine_type,year
N101AA,Corporation,BOEING,05/16/1998,737-823,Valid,Fixed Wing Multi-Engine,Turbo-Fan,1998
N202UA,Corporation,AIRBUS INDUSTRIE,11/02/2001,A320-232,Valid,Fixed Wing Multi-Engine,Turbo-Fan,2001
N303WN,Individual,BOEING,None,737-7H4,Valid,Fixed Wing Multi-Engine,Turbo-Jet,None
N404AA,Trust,EMBRAER,02/01/2005,EMB-145LR,Valid,Fixed Wing Multi-Engine,Turbo-Fan,2004
"""

FLIGHT_HEADER = (
    "Year,Month,DayofMonth,DayOfWeek,DepTime,CRSDepTime,ArrTime,CRSArrTime,UniqueCarrier,"
    "FlightNum,TailNum,ActualElapsedTime,CRSElapsedTime,AirTime,ArrDelay,DepDelay,Origin,Dest,"
    "Distance,TaxiIn,TaxiOut,Cancelled,CancellationCode,Diverted,CarrierDelay,WeatherDelay,"
    "NASDelay,SecurityDelay,LateAircraftDelay"
)


def make_flight_row(year=2008, month=1, day=3, carrier='AA', number='100', tail='N101AA',
                    origin='ORD', dest='LAX', dep_delay=0, arr_delay=0, distance=1745,
                    cancelled=0, code='', diverted=0) -> str:
    fields = [year, month, day, 4, 1005, 1000, 1210, 1205, carrier, number, tail,
              245, 245, 220, arr_delay, dep_delay, origin, dest, distance, 10, 15,
              cancelled, code, diverted, 'NA', 'NA', 'NA', 'NA', 'NA']
    return ','.join(str(field) for field in fields)


# Expected figures for this data set are worked out in the report tests.
FLIGHTS_2008 = [
    make_flight_row(day=3, carrier='AA', number='100', tail='N101AA', origin='ORD', dest='LAX',
                    dep_delay=10, arr_delay=5, distance=1745),
    make_flight_row(day=3, carrier='AA', number='102', tail='N101AA', origin='ORD', dest='LAX',
                    dep_delay=20, arr_delay=15, distance=1745),
    make_flight_row(day=4, carrier='UA', number='200', tail='N202UA', origin='ORD', dest='SFO',
                    dep_delay=30, arr_delay=25, distance=1846),
    make_flight_row(day=4, carrier='UA', number='202', tail='N202UA', origin='LAX', dest='ORD',
                    dep_delay=0, arr_delay=-5, distance=1745),
    make_flight_row(month=2, day=10, carrier='WN', number='300', tail='N303WN', origin='LAX', dest='SFO',
                    dep_delay=5, arr_delay=0, distance=337),
    make_flight_row(month=2, day=10, carrier='AA', number='104', tail='N404AA', origin='JFK', dest='ORD',
                    dep_delay=40, arr_delay=35, distance=740, cancelled=1, code='A'),
    make_flight_row(month=2, day=11, carrier='AA', number='106', tail='N999XX', origin='ORD', dest='JFK',
                    dep_delay=0, arr_delay=0, distance=740, diverted=1),
    make_flight_row(month=13, day=40, carrier='UA', number='204', tail='0', origin='SFO', dest='LAX',
                    dep_delay=15, arr_delay=10, distance=337),
]


@pytest.fixture
def flight_row():
    return make_flight_row


@pytest.fixture
def data_config(tmp_path):
    """Writes the lookup files plus a 2008 flight file and returns their Config."""
    paths = {}
    for name, content in (('airports', AIRPORTS), ('carriers', CARRIERS), ('planes', PLANES)):
        path = tmp_path / f'{name}.csv'
        path.write_text(content)
        paths[name] = str(path)

    flights = tmp_path / 'flights-2008.csv'
    flights.write_text('\n'.join([FLIGHT_HEADER] + FLIGHTS_2008) + '\n')

    return Config(airport_path=paths['airports'],
                  carrier_path=paths['carriers'],
                  plane_path=paths['planes'],
                  flight_paths={2008: str(flights)})


@pytest.fixture
def repository(data_config):
    # small chunks so every stream crosses chunk boundaries
    return Repository(data_config, chunksize=3)


@pytest.fixture
def write_flights(tmp_path, data_config):
    """Adds a flight file for another year and returns a repository that sees it."""
    def write(year, rows):
        path = tmp_path / f'flights-{year}.csv'
        path.write_text('\n'.join([FLIGHT_HEADER] + list(rows)) + '\n')
        data_config.flight_paths[year] = str(path)
        return Repository(data_config, chunksize=3)
    return write
