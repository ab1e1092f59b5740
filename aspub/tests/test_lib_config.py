import os

import yaml

import aspub.exc as a_exc

import aspub.lib.config as a_config

import aspub.tests.utils as a_t_utils

test_schema = a_config.getJsSchema({
    'key:string': {
        'description': 'Key String. I have a defval!',
        'type': 'string',
        'default': 'Default string!'
    },
    'key:integer': {
        'description': 'Key Integer',
        'type': 'integer',
    },
    'key:bool:defvalfalse': {
        'description': 'Key Bool, defval false.',
        'type': 'boolean',
        'default': False,
    },
})

class ConfTest(a_t_utils.PubTest):

    def test_config_basics(self):

        conf = a_config.Config(test_schema)
        # Start out empty
        self.eq(conf.asDict(), {})

        conf['key:integer'] = 1234
        self.eq(conf.get('key:integer'), 1234)
        self.none(conf.get('key:string'))

        with self.raises(a_exc.BadConfValu) as cm:
            conf['key:integer'] = 'haha'
        self.eq(cm.exception.get('name'), 'key:integer')

        with self.raises(a_exc.BadArg):
            conf['key:newp'] = 'haha'

        # defaults are filled in by validation
        conf.reqConfValid()
        self.eq(conf.asDict(), {
            'key:integer': 1234,
            'key:string': 'Default string!',
            'key:bool:defvalfalse': False,
        })

        self.len(3, conf)
        self.eq(sorted(conf), ['key:bool:defvalfalse', 'key:integer', 'key:string'])

        del conf['key:integer']
        self.notin('key:integer', conf)

        # the copy does not change the config
        info = conf.asDict()
        info['key:string'] = 'haha'
        self.eq(conf.get('key:string'), 'Default string!')

        conf = a_config.Config(test_schema, conf={'key:string': 'hehe'})
        self.eq(conf.asDict(), {'key:string': 'hehe'})

    def test_config_invalid(self):

        conf = a_config.Config(test_schema)
        conf.conf['key:integer'] = 'haha'
        with self.getLoggerStream('aspub.lib.config') as stream:
            with self.raises(a_exc.BadConfValu):
                conf.reqConfValid()

        self.isin('Configuration is invalid.', stream.getvalue())

    def test_config_envars(self):

        conf = a_config.Config(test_schema, prefix='alt')

        envars = {
            'ALT_KEY_STRING': 'hehe',
            'ALT_KEY_INTEGER': '8080',
            'ALT_KEY_BOOL_DEFVALFALSE': 'true',
            'KEY_STRING': 'newp',
        }
        with self.setTstEnvars(**envars):
            updates = conf.setConfFromEnvs()

        self.eq(updates, {'key:string': 'hehe', 'key:integer': 8080, 'key:bool:defvalfalse': True})
        self.eq(conf.get('key:integer'), 8080)

        # values which are already set are not replaced
        with self.setTstEnvars(ALT_KEY_STRING='haha'):
            with self.getLoggerStream('aspub.lib.config') as stream:
                self.eq(conf.setConfFromEnvs(), {})

        self.isin('skipped, it is already set', stream.getvalue())
        self.eq(conf.get('key:string'), 'hehe')

        with self.setTstEnvars(ALT_KEY_INTEGER='haha'):
            with self.raises(a_exc.BadConfValu):
                a_config.Config(test_schema, prefix='alt').setConfFromEnvs()

        self.eq(a_config.make_envar_name('lang:default', prefix='aspub'), 'ASPUB_LANG_DEFAULT')
        self.eq(a_config.make_envar_name('lang:default'), 'LANG_DEFAULT')

    def test_config_file(self):

        with self.getTestDir() as dirn:

            path = os.path.join(dirn, 'conf.yaml')
            with open(path, 'w') as fd:
                yaml.safe_dump({'key:string': 'fromfile', 'key:integer': 10}, fd)

            conf = a_config.Config(test_schema, conf={'key:integer': 20})
            self.eq(conf.setConfFromFile(path), {'key:string': 'fromfile'})
            self.eq(conf.get('key:string'), 'fromfile')
            self.eq(conf.get('key:integer'), 20)

            # a missing file is ignored
            self.eq(conf.setConfFromFile(os.path.join(dirn, 'newp.yaml')), {})

            path = os.path.join(dirn, 'list.yaml')
            with open(path, 'w') as fd:
                yaml.safe_dump(['key:string'], fd)

            with self.raises(a_exc.BadConfValu):
                conf.setConfFromFile(path)

    def test_config_validator(self):

        schema = {
            'type': 'object',
            'properties': {'size': {'type': 'integer', 'minimum': 0, 'default': 10}},
        }

        func = a_config.getJsValidator(schema)
        self.true(func is a_config.getJsValidator(schema))

        self.eq(func({}), {'size': 10})

        with self.raises(a_exc.SchemaViolation):
            func({'size': -1})

        nodefs = a_config.getJsValidator(schema, use_default=False)
        self.eq(nodefs({}), {})
