import datetime

import pytz

import aspub.exc as a_exc

import aspub.lib.time as a_time

import aspub.tests.utils as a_t_utils

class TimeTest(a_t_utils.PubTest):

    def test_time_parse(self):
        dtime = a_time.parse('2014-12-12T12:12:12Z')
        self.eq(dtime, datetime.datetime(2014, 12, 12, 12, 12, 12, tzinfo=pytz.utc))
        self.eq(dtime.tzinfo, pytz.utc)

        # offsets are converted to UTC
        dtime = a_time.parse('2014-12-12T14:12:12+02:00')
        self.eq(dtime, datetime.datetime(2014, 12, 12, 12, 12, 12, tzinfo=pytz.utc))

        # naive values are taken as UTC
        dtime = a_time.parse(' 2014-12-12T12:12:12.250 ')
        self.eq(dtime, datetime.datetime(2014, 12, 12, 12, 12, 12, 250000, tzinfo=pytz.utc))

        with self.raises(a_exc.BadTime):
            a_time.parse('newp')

        with self.raises(a_exc.BadTime):
            a_time.parse('2014-13-45T12:12:12Z')

    def test_time_norm(self):
        naive = datetime.datetime(2020, 1, 2, 3, 4, 5)
        self.eq(a_time.norm(naive), datetime.datetime(2020, 1, 2, 3, 4, 5, tzinfo=pytz.utc))
        self.eq(a_time.norm('2020-01-02T03:04:05Z'), a_time.norm(naive))

        with self.raises(a_exc.BadTypeValu):
            a_time.norm(1577934245)

    def test_time_repr(self):
        dtime = datetime.datetime(2020, 1, 2, 3, 4, 5, tzinfo=pytz.utc)
        self.eq(a_time.repr(dtime), '2020-01-02T03:04:05Z')

        dtime = datetime.datetime(2020, 1, 2, 3, 4, 5, 123000, tzinfo=pytz.utc)
        self.eq(a_time.repr(dtime), '2020-01-02T03:04:05.123000Z')

        self.eq(a_time.parse(a_time.repr(dtime)), dtime)

        dtime = datetime.datetime(999, 1, 1, tzinfo=pytz.utc)
        self.eq(a_time.repr(dtime), '0999-01-01T00:00:00Z')
        self.eq(a_time.parse(a_time.repr(dtime)), dtime)

        dtime = datetime.datetime(5, 6, 7, 8, 9, 10, 11, tzinfo=pytz.utc)
        self.eq(a_time.repr(dtime), '0005-06-07T08:09:10.000011Z')
        self.eq(a_time.parse(a_time.repr(dtime)), dtime)

    def test_time_timestamp(self):
        self.eq(a_time.timestamp(a_time.EPOCHUTC), 0)
        self.eq(a_time.timestamp(datetime.datetime(1970, 1, 1, 0, 0, 1)), 1000000)

    def test_time_duration(self):
        self.eq(a_time.parseDuration('PT5S'), datetime.timedelta(seconds=5))
        self.eq(a_time.parseDuration('P1DT2H3M4.5S'),
                datetime.timedelta(days=1, hours=2, minutes=3, seconds=4, microseconds=500000))
        self.eq(a_time.parseDuration('P2W'), datetime.timedelta(weeks=2))
        self.eq(a_time.parseDuration('-PT1M'), datetime.timedelta(minutes=-1))
        self.eq(a_time.parseDuration('P0Y0M1D'), datetime.timedelta(days=1))

        for text in ('newp', 'P', 'PT', '5S', 'P1H', 'PT1D'):
            with self.raises(a_exc.BadTime):
                a_time.parseDuration(text)

        # years and months do not have a fixed length
        with self.raises(a_exc.BadTime):
            a_time.parseDuration('P1Y')

        with self.raises(a_exc.BadTime):
            a_time.parseDuration('P2M')

        self.eq(a_time.normDuration('PT1H'), datetime.timedelta(hours=1))
        self.eq(a_time.normDuration(datetime.timedelta(hours=1)), datetime.timedelta(hours=1))

        with self.raises(a_exc.BadTypeValu):
            a_time.normDuration(3600)

    def test_time_duration_repr(self):
        self.eq(a_time.reprDuration(datetime.timedelta()), 'PT0S')
        self.eq(a_time.reprDuration(datetime.timedelta(seconds=5)), 'PT5S')
        self.eq(a_time.reprDuration(datetime.timedelta(days=1, hours=2, minutes=3, seconds=4, microseconds=500000)),
                'P1DT2H3M4.5S')
        self.eq(a_time.reprDuration(datetime.timedelta(days=3)), 'P3D')
        self.eq(a_time.reprDuration(datetime.timedelta(minutes=-1)), '-PT1M')
        self.eq(a_time.reprDuration(datetime.timedelta(microseconds=1)), 'PT0.000001S')

        delta = datetime.timedelta(days=9, seconds=7, microseconds=120)
        self.eq(a_time.parseDuration(a_time.reprDuration(delta)), delta)
