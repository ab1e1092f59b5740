'''
JSON Schema backed configuration.

Values are checked against their property schema with fastjsonschema as they
are set. Unset values may be filled from environment variables ( YAML
decoded ) and from a YAML file, and schema defaults are applied when the
complete configuration is validated.
'''
import os
import copy
import logging
import collections.abc as c_abc

import fastjsonschema

import aspub.exc as a_exc
import aspub.common as a_common

import aspub.lib.json as a_json

from fastjsonschema.exceptions import JsonSchemaValueException

logger = logging.getLogger(__name__)

draft07 = 'http://json-schema.org/draft-07/schema#'

# compiled validators by schema text
_JsValidators = {}  # type: ignore

def getJsSchema(confdefs):
    '''
    Return a draft 7 object schema which allows only the given properties.

    Args:
        confdefs (dict): Property name to JSON Schema.
    '''
    return {
        '$schema': draft07,
        'type': 'object',
        'properties': dict(confdefs),
        'additionalProperties': False,
    }

def getJsValidator(schema, use_default=True):
    '''
    Get a fastjsonschema callable.

    Args:
        schema (dict): A JSON Schema object.
        use_default (bool): Whether to insert "default" values into the validated data.

    Returns:
        callable: A function which returns the validated value and raises
        SchemaViolation for values which do not match.
    '''
    schema.setdefault('$schema', draft07)

    # compiling is slow, so equal schemas share one validator
    key = (a_json.dumps(schema), use_default)
    func = _JsValidators.get(key)
    if func is not None:
        return func

    comp = fastjsonschema.compile(schema, use_default=use_default)

    def wrap(valu):
        try:
            return comp(valu)
        except JsonSchemaValueException as e:
            raise a_exc.SchemaViolation(mesg=e.message, name=e.name) from e

    _JsValidators[key] = wrap
    return wrap

def make_envar_name(key, prefix=None):
    '''
    Convert a config name to its environment variable name ( ex. lang:default -> ASPUB_LANG_DEFAULT ).
    '''
    name = key.replace(':', '_')
    if prefix:
        name = f'{prefix}_{name}'
    return name.upper()

class Config(c_abc.MutableMapping):
    '''
    A configuration mapping validated against an object JSON Schema.

    Args:
        schema (dict): The object schema ( see getJsSchema() ).
        conf (dict): Optional initial values.
        prefix (str): Optional environment variable prefix.

    Notes:
        Defaults are not present until reqConfValid() is called.
    '''
    def __init__(self, schema, conf=None, prefix=None):

        self.conf = {}
        self.schema = schema
        self.prefix = prefix

        self.validator = getJsValidator(schema)
        self.propvalids = {}
        for name, info in schema.get('properties', {}).items():
            self.propvalids[name] = getJsValidator(dict(info))

        if conf is not None:
            for name, valu in conf.items():
                self[name] = valu

    def setConfFromFile(self, path):
        '''
        Set unset values from a YAML file. A missing file is ignored.

        Returns:
            dict: The values which were set.
        '''
        item = a_common.yamlload(path)
        if item is None:
            return {}

        if not isinstance(item, dict):
            raise a_exc.BadConfValu(mesg=f'The config file {path} must contain a mapping.', path=path)

        updates = {}
        for name, valu in item.items():
            if name in self.conf:
                continue
            self[name] = valu
            updates[name] = valu

        return updates

    def setConfFromEnvs(self):
        '''
        Set unset values from environment variables.

        Notes:
            The variable name is built by make_envar_name() with the config
            prefix. Values are YAML decoded, so "false" and "10" are a bool
            and an int.

        Returns:
            dict: The values which were set.
        '''
        updates = {}
        for name in self.propvalids:

            envar = make_envar_name(name, prefix=self.prefix)

            text = os.getenv(envar)
            if text is None:
                continue

            valu = a_common.yamlloads(text)

            if name in self.conf:
                if self.conf[name] != valu:
                    logger.warning('Config value %s from %s skipped, it is already set.', name, envar)
                continue

            self[name] = valu
            logger.debug('Set config value %s from %s.', name, envar)
            updates[name] = valu

        return updates

    def reqConfValid(self):
        '''
        Validate the complete configuration and fill in schema defaults.

        Raises:
            aspub.exc.BadConfValu: The configuration does not match the schema.
        '''
        try:
            self.validator(self.conf)
        except a_exc.SchemaViolation as e:
            logger.exception('Configuration is invalid.')
            raise a_exc.BadConfValu(mesg=f'Invalid configuration: {e.get("mesg")}') from None

    def asDict(self):
        '''
        Return a copy of the configuration values.
        '''
        return copy.deepcopy(self.conf)

    def __setitem__(self, name, valu):

        func = self.propvalids.get(name)
        if func is None:
            raise a_exc.BadArg(mesg=f'{name} is not a configuration option.', name=name)

        try:
            func(valu)
        except a_exc.SchemaViolation as e:
            mesg = f'Invalid value for {name}: {e.get("mesg")}'
            raise a_exc.BadConfValu(mesg=mesg, name=name, valu=valu) from None

        self.conf[name] = valu

    def __getitem__(self, name):
        return self.conf[name]

    def __delitem__(self, name):
        del self.conf[name]

    def __iter__(self):
        return iter(self.conf)

    def __len__(self):
        return len(self.conf)
